from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from order_manifest.config.loader import ConfigError, load_config
from order_manifest.logging.init import log_summary, setup_logging
from order_manifest.services.orchestrator import ProcessingError, process_all, scan_order_files
from order_manifest.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (override) and config
- Collect input files (arguments, or *.xlsx in source_directory)
- Build one manifest per file, echo the processing log, print SUMMARY

Exit codes: 0 all files succeeded (or none found), 2 at least one file
failed, 1 fatal startup error.
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env via python-dotenv; a broken file only warns."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except (OSError, UnicodeDecodeError) as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="order-manifest",
        description="Consolidate order exports (.xlsx) into a shipping manifest",
    )
    p.add_argument("files", nargs="*", type=Path, help="Order export files (default: *.xlsx in source_directory)")
    p.add_argument("--config", type=Path, default=None, help="Config file (default: config/manifest.yml)")
    p.add_argument("--output-dir", type=Path, default=None, help="Override output_directory")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print detected header/columns & first rows then exit")
    return p.parse_args(argv)


def _inspect_data(files: list[Path], cfg) -> int:
    from order_manifest.excel.reader import WorkbookReadError, read_order_rows
    from order_manifest.services.column_mapper import build_column_map
    from order_manifest.services.errors import ManifestError
    from order_manifest.services.header_detector import detect_header

    if not files:
        print("inspect: no .xlsx files")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            rows = read_order_rows(f)
        except WorkbookReadError as e:
            print(f"  read_error: {e}")
            continue
        print(f"  rows={len(rows)}")
        try:
            detection = detect_header(rows, scan_limit=cfg.header_scan_limit)
            column_map = build_column_map(rows[detection.index], detection.layout)
        except ManifestError as e:
            print(f"  error={e}")
            continue
        print(f"  header_row={detection.index} layout={detection.layout.label}")
        print(f"  columns={column_map.columns}")
        for row in rows[detection.index + 1 : detection.index + 4]:
            print("    sample_row=", row)
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    # None のときのみ sys.argv を読む (テストで main([]) を呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    if args.output_dir is not None:
        cfg = replace(cfg, output_directory=str(args.output_dir))

    if args.files:
        missing = [f for f in args.files if not f.is_file()]
        if missing:
            logger.error(f"file not found: {', '.join(str(m) for m in missing)}")
            return EXIT_FATAL
        files = list(args.files)
    else:
        directory = Path(cfg.source_directory)
        try:
            files = scan_order_files(directory)
        except ProcessingError as e:
            logger.error(f"{e}")
            return EXIT_FATAL
        logger.info(f"Processing files from: {directory}")

    if args.inspect_data:
        return _inspect_data(files, cfg)

    result = process_all(files, cfg)

    summary_line = render_summary_line(result)
    # log_summary が "SUMMARY " を付けるので除去
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
