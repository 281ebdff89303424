from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, default_config, load_config, resolve_config_path
from ..excel.reader import DecodeError, read_workbook
from ..excel.sheet_selector import compile_sheet_patterns, select_sheet_name
from ..logging.init import log_summary, setup_logging
from ..models.config_models import ReportConfig
from ..services.display import render_publisher_table, render_summary_panel
from ..services.orchestrator import ProcessingError, scan_excel_files
from ..services.session import PublisherSession
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (FSR_CONFIG may point at the config file)
- Load config (optional when files are given on the command line)
- Collect files: positional arguments, else scan source_directory
- Run one batch, apply the search term, print per-person tables and totals
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv. 失敗時は警告のみで続行."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Field service report aggregator")
    p.add_argument("files", nargs="*", type=Path, help="Excel exports (default: scan source_directory)")
    p.add_argument("--config", default=None, help="Config file (default: $FSR_CONFIG or config/report.yml)")
    p.add_argument("--search", default="", help="Only show people whose name contains this text")
    p.add_argument("--raw-columns", default="", help="Extra raw columns to show, e.g. 'A,F'")
    p.add_argument("--no-tables", action="store_true", help="Print totals only")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet names & first rows then exit")
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace, logger: logging.Logger) -> ReportConfig:
    path = resolve_config_path(args.config)
    if path.exists() or args.config or not args.files:
        return load_config(path)
    logger.debug(f"config not found ({path}) -> defaults")
    return default_config()


def _inspect_data(paths: list[Path], cfg: ReportConfig) -> int:
    patterns = compile_sheet_patterns(cfg.sheet_patterns)
    for f in paths:
        print(f"FILE: {f.name}")
        try:
            wb = read_workbook(f)
        except DecodeError as e:
            print(f"  read_error: {e.cause}")
            continue
        selected = select_sheet_name(list(wb.sheets.keys()), patterns)
        for sname, rows in wb.sheets.items():
            marker = " (selected)" if sname == selected else ""
            print(f"  SHEET: {sname}{marker} rows={len(rows)}")
            if sname == selected:
                print("    sample_rows=", rows[:3])
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (テストで [] を渡すケース)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args, logger)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.files:
        paths = list(args.files)
    else:
        directory = Path(cfg.source_directory)
        try:
            paths = scan_excel_files(directory, cfg.file_pattern)
        except ProcessingError as e:
            logger.error(f"directory not found: {directory} ({e})")
            return EXIT_FATAL
        logger.info(f"Processing files from: {directory}")

    if args.inspect_data:
        return _inspect_data(paths, cfg)

    if not paths:
        logger.info("no files to process")
        return EXIT_SUCCESS

    session = PublisherSession(cfg)
    if not session.load_files(paths):
        # session.error は既に ERROR ログ出力済み
        return EXIT_FATAL
    session.set_search_term(args.search)

    stats = session.processing_stats
    if stats is not None:
        logger.info(
            f"files={stats.total_files} rows={stats.total_rows} "
            f"publisher_rows={stats.publisher_rows} unique_publishers={stats.unique_publishers}"
        )

    summary = session.summary_stats
    if not args.no_tables:
        extra = [c.strip().upper() for c in args.raw_columns.split(",") if c.strip()]
        raw = session.data.raw_columns if session.data is not None else None
        if session.search_term.strip() and not session.has_data:
            print(f'No publishers match "{session.search_term.strip()}"')
        for name, records in session.sorted_publishers:
            print(render_publisher_table(name, records, raw, extra))
            print()
        if summary is not None:
            print(render_summary_panel(summary, session.search_term.strip()))

    if summary is not None:
        # log_summary が "SUMMARY " を付与するため先頭を除去
        log_summary(render_summary_line(summary)[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
