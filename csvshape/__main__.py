"""Entry point: python -m csvshape"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import get_config, unescape_delimiter
from .loader import CsvShapeError, OutputFormat, load
from .models import ResultSet


def build_parser(config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csvshape",
        description="Parse CSV into records, a result set or JSON.",
    )
    parser.add_argument("source", nargs="?", default="-", help="CSV file path, inline CSV with --text, or - for stdin")
    parser.add_argument("--text", action="store_true", help="treat SOURCE as inline CSV text")
    parser.add_argument("-d", "--delimiter", type=unescape_delimiter, default=config.delimiter, help="field delimiter (\\t for tab)")
    parser.add_argument("-n", "--row-limit", type=int, default=config.row_limit, help="max data rows (<= 0: all)")
    cleanup = parser.add_mutually_exclusive_group()
    cleanup.add_argument(
        "--cleanup",
        dest="cleanup_columns",
        action="store_true",
        help="sanitize header names (default unless CSVSHAPE_CLEANUP_COLUMNS is off)",
    )
    cleanup.add_argument(
        "--no-cleanup",
        dest="cleanup_columns",
        action="store_false",
        help="keep header names verbatim",
    )
    parser.set_defaults(cleanup_columns=config.cleanup_columns)
    parser.add_argument(
        "-o",
        "--output",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.RECORDS.value,
    )
    parser.add_argument("--root-name", default=None, help="wrap json output as {ROOT_NAME: ...}")
    return parser


def main(argv=None) -> int:
    config = get_config()
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser(config).parse_args(argv)

    if args.source == "-":
        source = sys.stdin.read()
    elif args.text:
        source = args.source
    else:
        source = Path(args.source)

    try:
        shaped = load(
            source,
            output=args.output,
            delimiter=args.delimiter,
            row_limit=args.row_limit,
            cleanup_columns=args.cleanup_columns,
            root_name=args.root_name,
        )
    except (CsvShapeError, ValueError) as e:
        print(f"csvshape: {e}", file=sys.stderr)
        return 2

    if isinstance(shaped, ResultSet):
        print(shaped.model_dump_json())
    elif isinstance(shaped, str):
        print(shaped)
    else:
        print(json.dumps(shaped, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
