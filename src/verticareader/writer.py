"""
Functions for writing decoded rows as CSV, JSON or JSON Lines
"""

import csv
import gzip
import json
import logging
import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from itertools import islice
from typing import Iterable, Iterator, Optional, TextIO

from .errors import SchemaError
from .formatting import format_json_row, format_row
from .reader import check_column_count, open_native
from .types import ColumnSchema, Row
from .typespec import read_types

logger = logging.getLogger(__name__)

STDOUT = "-"

EXTENSIONS = {
    "csv": ".csv",
    "json": ".json",
    "jsonl": ".jsonl",
}


@dataclass
class WriterOptions:
    """Options controlling how a native file is converted"""

    output: Optional[str] = None
    output_format: str = "csv"
    tz_offset: int = 0
    delimiter: str = ","
    quotechar: str = '"'
    no_header: bool = False
    gzip: bool = False
    limit: Optional[int] = None

    def __post_init__(self):
        if self.output_format not in EXTENSIONS:
            raise ValueError(f"Unknown output format '{self.output_format}'")
        if len(self.delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character, got '{self.delimiter}'")
        if self.limit is not None and self.limit < 0:
            raise ValueError(f"Limit must not be negative, got {self.limit}")


def output_filename(input_file: str, options: WriterOptions) -> str:
    """
    Work out where converted output goes

    An explicit output name wins; ``-`` means stdout. Otherwise the input
    name gets the extension of the output format, plus ``.gz`` when
    compressing.
    """
    if options.output:
        return options.output

    base, _ = os.path.splitext(input_file)
    filename = base + EXTENSIONS[options.output_format]
    if options.gzip:
        filename += ".gz"
    return filename


@contextmanager
def open_output(filename: str, compress: bool = False) -> Iterator[TextIO]:
    if filename == STDOUT:
        if compress:
            logger.warning("not compressing output written to stdout")
        yield sys.stdout
        sys.stdout.flush()
        return

    # Create directory if it doesn't exist
    directory = os.path.dirname(os.path.abspath(filename))
    if directory and not os.path.exists(directory):
        os.makedirs(directory)

    if compress:
        stream = gzip.open(filename, "wt", encoding="utf-8", newline="")
    else:
        stream = open(filename, "w", encoding="utf-8", newline="")
    with stream:
        yield stream


def write_csv(rows: Iterable[Row],
              schema: ColumnSchema,
              stream: TextIO,
              tz_offset: int = 0,
              delimiter: str = ",",
              quotechar: str = '"',
              no_header: bool = False) -> int:
    """
    Write rows as CSV records

    A header record of column names is written first unless ``no_header``
    is set or some column has no name.

    Returns:
    --------
    int
        Number of rows written
    """
    writer = csv.writer(stream, delimiter=delimiter, quotechar=quotechar, lineterminator="\n")

    if not no_header and schema.has_names():
        writer.writerow(schema.names)

    count = 0
    for row in rows:
        writer.writerow(format_row(row, schema, tz_offset))
        count += 1
    return count


def _check_names(schema: ColumnSchema) -> None:
    if not schema.has_names():
        raise SchemaError("JSON files require column names in types file")


def _dumps(record: dict) -> str:
    return json.dumps(record, ensure_ascii=False, separators=(",", ":"))


def write_json(rows: Iterable[Row], schema: ColumnSchema, stream: TextIO, tz_offset: int = 0) -> int:
    """
    Write rows as a single JSON array of objects keyed by column name

    Raises:
    -------
    SchemaError
        If any column has no name
    """
    _check_names(schema)

    count = 0
    stream.write("[")
    for row in rows:
        if count > 0:
            stream.write(",")
        stream.write(_dumps(format_json_row(row, schema, tz_offset)))
        count += 1
    stream.write("]\n")
    return count


def write_json_lines(rows: Iterable[Row], schema: ColumnSchema, stream: TextIO, tz_offset: int = 0) -> int:
    """Write one JSON object per line; requires every column to be named"""
    _check_names(schema)

    count = 0
    for row in rows:
        stream.write(_dumps(format_json_row(row, schema, tz_offset)))
        stream.write("\n")
        count += 1
    return count


def process_file(input_file: str, types: str, options: Optional[WriterOptions] = None) -> int:
    """
    Convert a native binary file to CSV, JSON or JSON Lines

    Parameters:
    -----------
    input_file : str
        Path to the native binary file
    types : str
        Path to the column types file
    options : Optional[WriterOptions], default=None
        Output settings; CSV to a file named after the input by default

    Returns:
    --------
    int
        Number of rows written

    Raises:
    -------
    FileNotFoundError
        If the input or types file does not exist
    FormatError
        If the input is not a valid native binary file
    SchemaError
        If the types file is invalid, or JSON output is requested for
        unnamed columns
    ValueError
        If the output would overwrite the input
    """
    options = options or WriterOptions()

    if not os.path.isfile(input_file):
        raise FileNotFoundError(f"input file {input_file} does not exist")

    schema = read_types(types)
    if options.output_format != "csv":
        _check_names(schema)

    output = output_filename(input_file, options)
    if output != STDOUT and os.path.abspath(output) == os.path.abspath(input_file):
        raise ValueError("can't overwrite input file")

    with open_native(input_file) as native:
        check_column_count(native, schema, input_file)
        rows = islice(native, options.limit)

        with open_output(output, options.gzip) as stream:
            if options.output_format == "json":
                count = write_json(rows, schema, stream, options.tz_offset)
            elif options.output_format == "jsonl":
                count = write_json_lines(rows, schema, stream, options.tz_offset)
            else:
                count = write_csv(
                    rows,
                    schema,
                    stream,
                    tz_offset=options.tz_offset,
                    delimiter=options.delimiter,
                    quotechar=options.quotechar,
                    no_header=options.no_header,
                )

    logger.info("wrote %d rows to %s", count, output)
    return count
