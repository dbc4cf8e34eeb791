"""CLI entrypoint for the covid-19 region tracker pipeline."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from casemap.common.config_loader import load_config
from casemap.common.constants import COMMANDS, EXIT_HARD_FAIL, EXIT_SUCCESS
from casemap.common.errors import PipelineError
from casemap.common.ids import generate_run_id
from casemap.common.logging import build_logger, log_event
from casemap.pipeline.load import load_collection
from casemap.pipeline.reports import load_summary, search_summary
from casemap.search.session import SearchSession


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument("query", nargs="?", default="")
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--payload-dir", default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--top", type=int, default=10)
    parser.add_argument("--days-ago", type=int, default=0)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def _emit(payload) -> None:
    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    logger = build_logger(run_id, level=args.log_level)
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
    payload_dir = Path(args.payload_dir) if args.payload_dir else None

    try:
        config = load_config(Path(args.config_dir), overlay_config_dir=overlay_config_dir)
        collection = load_collection(config, payload_dir=payload_dir, logger=logger, run_id=run_id)
    except PipelineError as exc:
        log_event(
            logger,
            f"{args.command} failed",
            run_id=run_id,
            stage=args.command,
            event="COMMAND_FAIL",
            status="error",
            error_code=exc.error_code,
        )
        return EXIT_HARD_FAIL
    except Exception:
        log_event(
            logger,
            f"unexpected failure during {args.command}",
            run_id=run_id,
            stage=args.command,
            event="COMMAND_FAIL",
            status="error",
            error_code="UNEXPECTED_ERROR",
        )
        return EXIT_HARD_FAIL

    if args.command == "load":
        _emit(load_summary(collection, top=args.top, days_ago=args.days_ago))
        return EXIT_SUCCESS

    session = SearchSession(
        collection,
        limit=config.search.limit,
        debounce_seconds=config.search.debounce_seconds,
        logger=logger,
    )
    session.set_query(args.query)
    session.flush()
    _emit(search_summary(args.query, session.results))
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        return run_command(args)
    except PipelineError:
        return EXIT_HARD_FAIL
    except Exception:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
