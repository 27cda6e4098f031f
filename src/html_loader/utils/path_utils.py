# src/html_loader/utils/path_utils.py
import logging
import posixpath
from pathlib import Path
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for package paths, import path resolution and output locations.
    """

    # --- Package specific paths

    @staticmethod
    def get_package_root() -> Path:
        """Returns the directory of the html_loader package (holds settings.json)."""
        return Path(__file__).resolve().parent.parent

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_package_root() / "settings.json"

    # --- Import resolution ---

    @staticmethod
    def resolve_import(current_file_path: str, target: str) -> str:
        """
        Joins a relative reference onto the directory of the current file.

        Purely syntactic: the result is normalised ('..' and '.' collapsed) but never
        checked on disk. Like a POSIX path join of all segments, an absolute target is
        appended to the directory rather than replacing it.
        """
        directory = posixpath.dirname(current_file_path.replace("\\", "/"))
        joined = f"{directory}/{target}" if directory else target
        return posixpath.normpath(joined)

    # --- Output locations ---

    @staticmethod
    def get_output_paths(input_path: Path, out_dir: Optional[Path] = None) -> Tuple[Path, Path]:
        """
        Returns (code_path, map_path) for an input file.
        e.g. 'src/foo.html' -> 'src/foo.html.js', 'src/foo.html.js.map'
        """
        target_dir = out_dir if out_dir else input_path.parent
        target_dir.mkdir(parents=True, exist_ok=True)
        code_path = target_dir / f"{input_path.name}.js"
        return code_path, target_dir / f"{code_path.name}.map"
