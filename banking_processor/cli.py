"""
Command Line Entry Point

Reads one batch (or a list of batches) from a JSON file and prints the
summary report for each.
"""

import argparse
import json
import sys
from decimal import Decimal
from typing import Any, List, Optional

from .config import LOG_LEVELS, get_config
from .logging_config import setup_logging
from .reporting import format_report, result_to_json
from .transactions import ProcessingResult, TransactionProcessor


def load_batches(path: str) -> List[Any]:
    """
    Load batches from a JSON file, or stdin when path is "-"

    Floats are read as Decimal so amounts keep their exact value.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the content is not UTF-8 JSON (JSONDecodeError and
            UnicodeDecodeError are both ValueErrors)
    """
    if path == "-":
        data = json.load(sys.stdin, parse_float=Decimal)
    else:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh, parse_float=Decimal)

    if isinstance(data, list):
        return data
    return [data]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="banking-processor",
        description="Validate and apply banking transactions, then print a summary report",
    )
    parser.add_argument(
        "input",
        help="JSON file with one batch object or a list of them ('-' for stdin)",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Report output format",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Log level (overrides BANKING_LOG_LEVEL)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI; returns the process exit code"""
    args = build_parser().parse_args(argv)
    settings = get_config()

    setup_logging(
        level=args.log_level or settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
    )

    try:
        batches = load_batches(args.input)
    except (OSError, ValueError) as e:
        print(f"❌ Cannot read input {args.input}: {e}", file=sys.stderr)
        return 2

    processor = TransactionProcessor(log_transactions=settings.log_transactions)
    results: List[ProcessingResult] = [processor.process_batch(batch) for batch in batches]

    if args.format == "json":
        if len(results) == 1:
            print(result_to_json(results[0]))
        else:
            print(json.dumps([r.to_dict() for r in results], indent=2, default=str, ensure_ascii=False))
    else:
        print("\n\n".join(format_report(r, width=settings.report_width) for r in results))

    return 0 if all(r.succeeded for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
