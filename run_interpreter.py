"""CLI entry point for the task interpreter."""

import argparse
import json
import sys
from datetime import date

from dotenv import load_dotenv

from src.interpreter import ParseFailure, TaskInterpreter
from src.logging_config import configure_logging


def _reference_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a YYYY-MM-DD date")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Interpret a spoken or typed task for the household board"
    )
    parser.add_argument("text", help="Transcript to interpret")
    parser.add_argument(
        "--reference-date",
        type=_reference_date,
        default=None,
        help="Date relative phrases are anchored to (default: today)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (overrides LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--record",
        action="store_true",
        help="Print the row to insert into the task store instead of the draft",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()

    args = build_parser().parse_args(argv)
    configure_logging(level_override=args.log_level)

    reference_date = args.reference_date or date.today()
    result = TaskInterpreter().interpret(args.text, reference_date)

    if isinstance(result, ParseFailure):
        print(f"ERROR: {result.message} ({result.reason})", file=sys.stderr)
        return 1

    payload = result.to_record() if args.record else result.to_dict()
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
