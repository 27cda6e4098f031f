# src/html_loader/app.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from html_loader.controllers.batch_controller import BatchController
from html_loader.controllers.transform_controller import transform
from html_loader.managers.config_manager import config_manager
from html_loader.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

transform_help_text = """
  transform <file> [<file> ...] [--options <json>] [--out-dir <dir>] [--no-map] [--workers <N>] [--stdout]
      Transforms HTML component files into JS modules (<file>.js) with source maps (<file>.js.map).
""".strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="html-loader", description="Transform HTML components into JS modules.")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Logging level (default: debug.level from settings.json).")
    subs = parser.add_subparsers(dest="subcommand", help="Sub-command help")

    p_tr = subs.add_parser("transform", help="Transform one or more HTML files.",
                           description=transform_help_text,
                           formatter_class=argparse.RawDescriptionHelpFormatter)
    p_tr.add_argument("files", metavar="FILE", nargs="+", help="HTML component files.")
    p_tr.add_argument("--options", type=str, default=None,
                      help="JSON file with loader options (ignoreLinks, ignorePathReWrite, ...).")
    p_tr.add_argument("--out-dir", type=str, default=None, help="Output directory (default: next to input).")
    p_tr.add_argument("--no-map", action="store_true", help="Do not write source map files.")
    p_tr.add_argument("--workers", type=int, default=None, help="Number of parallel processes.")
    p_tr.add_argument("--stdout", action="store_true", help="Print the generated code of a single file.")
    p_tr.add_argument("--no-progress", action="store_true", help="Hide the progress bar.")
    return parser


def load_host_options(path: Optional[str]) -> Dict[str, Any]:
    """Reads the options JSON file and layers it over the 'loader' defaults."""
    overrides: Dict[str, Any] = {}
    if path:
        with open(path, "r", encoding="utf-8") as f:
            overrides = json.load(f)
        if not isinstance(overrides, dict):
            raise ValueError(f"Options file {path} must contain a JSON object.")
    return config_manager.loader_options(overrides)


def _run_stdout(file: str, options: Dict[str, Any]) -> int:
    source = Path(file)
    result = transform(source.read_text(encoding="utf-8"), str(source.resolve()), options)
    sys.stdout.write(result.code)
    return 0


def handle_transform(pargs: argparse.Namespace) -> int:
    try:
        options = load_host_options(pargs.options)
    except (OSError, ValueError) as e:
        print(f"Error: could not load options: {e}")
        return 1

    if pargs.stdout:
        if len(pargs.files) != 1:
            print("Error: --stdout expects exactly one file.")
            return 1
        try:
            return _run_stdout(pargs.files[0], options)
        except Exception as e:
            logger.error("Transformation of %s failed: %s", pargs.files[0], e, exc_info=True)
            print(f"Error: {e}")
            return 1

    stats = BatchController().transform_files(
        pargs.files,
        options=options,
        out_dir=pargs.out_dir,
        **config_manager.batch_settings(pargs.workers, pargs.no_map),
        show_progress=not pargs.no_progress,
    )

    for report in stats["reports"]:
        if report.success:
            print(f"{report.input_path} -> {report.output_path}")
        else:
            print(f"FAILED {report.input_path}: {report.error}")
    print(f"Transformed {stats['files_success']}/{stats['files_total']} files in {stats['duration_s']}s.")
    return 0 if stats["files_failed"] == 0 else 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    pargs = parser.parse_args(argv)

    configure_logger(**config_manager.logging_settings(pargs.log_level))

    if pargs.subcommand != "transform":
        parser.print_help()
        return 0 if pargs.subcommand is None else 1

    return handle_transform(pargs)


if __name__ == "__main__":
    sys.exit(main())
