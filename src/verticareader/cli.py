"""
Command line interface: convert Vertica native binary files to CSV/JSON
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from . import __version__
from .writer import STDOUT, WriterOptions, process_file


def tz_offset(value: str) -> int:
    hours = int(value)
    if not -128 <= hours <= 127:
        raise argparse.ArgumentTypeError(f"timezone offset {hours} is out of range")
    return hours


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="verticareader",
        description="Convert Vertica native binary files to CSV/JSON",
    )
    parser.add_argument("input", help="The file to process")
    parser.add_argument(
        "-o", "--output",
        help=f"Output file name; use {STDOUT} for stdout [default: name based on input file name]",
    )
    parser.add_argument(
        "-t", "--types", required=True,
        help="File with list of column types, names, and conversions",
    )
    parser.add_argument("-z", "--tz-offset", type=tz_offset, default=0, help="+/- hours")
    parser.add_argument("-d", "--delimiter", default=",", help="Field delimiter for CSV file [default: ,]")
    parser.add_argument("-n", "--no-header", action="store_true", help="Don't include column header row in CSV file")
    parser.add_argument("-s", "--single-quotes", action="store_true", help="Use ' for quoting in CSV file")

    formats = parser.add_mutually_exclusive_group()
    formats.add_argument("-j", "--json", action="store_true", help="Output in JSON format [default: CSV]")
    formats.add_argument("-J", "--json-lines", action="store_true", help="Output in JSON Lines format [default: CSV]")

    parser.add_argument("-g", "--gzip", action="store_true", help="Compress output file using gzip")
    parser.add_argument("-l", "--limit", type=int, default=None, help="Only take the first LIMIT rows")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debugging information")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def options_from_args(args: argparse.Namespace) -> WriterOptions:
    if args.json:
        output_format = "json"
    elif args.json_lines:
        output_format = "jsonl"
    else:
        output_format = "csv"

    return WriterOptions(
        output=args.output,
        output_format=output_format,
        tz_offset=args.tz_offset,
        delimiter=args.delimiter,
        quotechar="'" if args.single_quotes else '"',
        no_header=args.no_header,
        gzip=args.gzip,
        limit=args.limit,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        process_file(args.input, args.types, options_from_args(args))
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0
