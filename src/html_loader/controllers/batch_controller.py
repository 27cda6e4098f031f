# src/html_loader/controllers/batch_controller.py
from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any, Dict, Iterable, List, Optional

from tqdm.auto import tqdm

from html_loader.model import FileTransformReport
from html_loader.utils.parallel_workers import transform_file_worker

logger = logging.getLogger(__name__)


class BatchController:
    """
    Transforms many HTML files, one independent task per file.
    Uses a process pool when more than one worker and more than one file are involved.
    """

    def __init__(self, *, default_workers: Optional[int] = None) -> None:
        self.default_workers = default_workers or (os.cpu_count() or 4)

    def transform_files(
            self,
            paths: Iterable[str],
            *,
            options: Optional[Dict[str, Any]] = None,
            out_dir: Optional[str] = None,
            workers: Optional[int] = None,
            write_source_maps: bool = True,
            show_progress: bool = True,
    ) -> Dict[str, Any]:
        """
        Runs the transformation for every path.
        Returns a dictionary containing execution statistics and per-file reports.
        """
        files = [str(p) for p in paths]
        if not files:
            return self._stats([], 0.0)

        n_workers = int(workers or self.default_workers)
        start = time.perf_counter()
        reports: List[FileTransformReport] = []

        if n_workers <= 1 or len(files) == 1:
            iterator = files if not show_progress else tqdm(files, desc="Transforming", unit=" file")
            for path in iterator:
                raw = transform_file_worker(path, options, out_dir, write_source_maps)
                reports.append(FileTransformReport.model_validate_json(raw))
        else:
            with ProcessPoolExecutor(max_workers=n_workers) as pool:
                futures = {
                    pool.submit(transform_file_worker, path, options, out_dir, write_source_maps): path
                    for path in files
                }
                iterator = as_completed(futures)
                if show_progress:
                    iterator = tqdm(iterator, total=len(futures), desc="Transforming", unit=" file")

                for fut in iterator:
                    path = futures[fut]
                    try:
                        reports.append(FileTransformReport.model_validate_json(fut.result()))
                    except Exception as e:
                        logger.error("Failed to process %s: %s", path, e, exc_info=True)
                        reports.append(FileTransformReport(input_path=path, error=str(e)))

        return self._stats(reports, time.perf_counter() - start)

    @staticmethod
    def _stats(reports: List[FileTransformReport], duration: float) -> Dict[str, Any]:
        ok = sum(1 for r in reports if r.success)
        return {
            "files_total": len(reports),
            "files_success": ok,
            "files_failed": len(reports) - ok,
            "duration_s": round(duration, 3),
            "reports": reports,
        }
