# file: src/html_loader/utils/parallel_workers.py
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from html_loader.controllers.transform_controller import transform
from html_loader.model import FileTransformReport
from html_loader.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


def transform_file_worker(
    input_path: str,
    options: Optional[Dict[str, Any]],
    out_dir: Optional[str],
    write_source_maps: bool = True,
) -> str:
    """
    Worker function transforming one HTML file on disk.
    Returns a JSON string of the FileTransformReport (never raises).
    """
    report = FileTransformReport(input_path=input_path)
    try:
        source = Path(input_path)
        content = source.read_text(encoding="utf-8")
        result = transform(content, str(source.resolve()), options)

        code_path, map_path = PathUtils.get_output_paths(source, Path(out_dir) if out_dir else None)
        code = result.code
        if result.source_map is not None and write_source_maps:
            result.source_map.file = code_path.name
            map_path.write_text(result.source_map.to_json(), encoding="utf-8")
            code += f"\n//# sourceMappingURL={map_path.name}\n"
            report.map_path = str(map_path)

        code_path.write_text(code, encoding="utf-8")
        report.output_path = str(code_path)
        report.success = True

    except Exception as e:
        logger.error(f"WORKER ERROR transforming {input_path}: {e}", exc_info=True)
        report.error = str(e)

    # Serialize to JSON to avoid complex pickling on Windows spawn
    return report.model_dump_json()
