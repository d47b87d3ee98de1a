"""
verticareader - A package for reading Vertica native binary files

This package decodes the native binary export format of the Vertica
database into rows and converts them to CSV, JSON or pandas DataFrames.
"""

__version__ = "2.1.0"

from .errors import FormatError, SchemaError
from .formatting import format_json_value, format_value
from .reader import open_native, read_native, scan_directory
from .rows import NativeFile
from .types import ColumnConversion, ColumnSchema, ColumnType
from .typespec import parse_types, read_types
from .writer import WriterOptions, process_file

__all__ = [
    "ColumnConversion",
    "ColumnSchema",
    "ColumnType",
    "FormatError",
    "NativeFile",
    "SchemaError",
    "WriterOptions",
    "format_json_value",
    "format_value",
    "open_native",
    "parse_types",
    "process_file",
    "read_native",
    "read_types",
    "scan_directory",
]
