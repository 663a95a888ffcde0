from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config
from ..logging.init import enable_debug, format_miss_counts, log_summary, setup_logging
from ..logging.miss_log import MissLogBuffer
from ..matching.roster import is_massar_roster
from ..roster.reader import RosterReadError, read_roster
from ..services.insertion import UnknownMarkTypeError, resolve_mark_type
from ..services.orchestrator import ProcessingError, process_documents
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- load .env, resolve and load the parser config
- optionally load the roster and resolve the grade category
- parse every OCR text file, plan grade writes, log misses
- print the SUMMARY line and exit with the batch status
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

CONFIG_ENV_VAR = "GRADESHEET_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/parser.yml")


def _load_env_file(path: Path, override: bool = True) -> None:
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="OCR grade sheet -> student records")
    p.add_argument("files", nargs="+", type=Path, help="OCR text files (UTF-8)")
    p.add_argument("--roster", type=Path, help="Roster workbook (.xlsx) or .csv to match against")
    p.add_argument("--sheet", help="Roster sheet name (default: first sheet)")
    p.add_argument("--mark-type", help="Grade category to write (e.g. 'الفرض 1' or fard1)")
    p.add_argument("--config", type=Path, help="Parser config YAML")
    p.add_argument("--output", type=Path, help="Write extracted records and planned writes as JSON")
    p.add_argument("--no-miss-log", action="store_true", help="Do not write logs/misses-*.log")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _resolve_config_path(args: argparse.Namespace) -> Path | None:
    if args.config is not None:
        return args.config
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] はテストからの明示指定)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        enable_debug()

    try:
        cfg = load_config(_resolve_config_path(args))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    roster_rows = None
    mark_type = None
    if args.roster is not None:
        if not args.mark_type:
            logger.error("--mark-type is required together with --roster")
            return EXIT_FATAL
        try:
            mark_type = resolve_mark_type(args.mark_type, cfg)
            roster_rows = read_roster(args.roster, args.sheet)
        except (UnknownMarkTypeError, RosterReadError) as e:
            logger.error(f"roster: {e}")
            return EXIT_FATAL
        if not is_massar_roster(roster_rows, cfg):
            logger.warning(f"roster {args.roster.name} does not look like a Massar export")

    miss_log = None if args.no_miss_log else MissLogBuffer()
    try:
        result, documents = process_documents(args.files, cfg, roster_rows, mark_type, miss_log)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    if args.output is not None:
        payload = [d.as_dict() for d in documents]
        args.output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        logger.info(f"records written to {args.output}")

    if miss_log is not None:
        path = miss_log.flush()
        if path is not None:
            logger.info(f"misses logged to {path} ({format_miss_counts(miss_log.reason_counts())})")

    log_summary(render_summary_line(result)[len("SUMMARY ") :])

    if result.recognized_documents < result.documents or result.total_not_found > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
