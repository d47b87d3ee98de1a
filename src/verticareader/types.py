"""
Data types and structures for Vertica native binary files
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from .constants import VARIABLE_WIDTH
from .errors import SchemaError

logger = logging.getLogger(__name__)

_PAREN_RE = re.compile(r"\(.+\)")


class ColumnType(Enum):
    """Logical type of a column, as named in the column types file"""

    INTEGER = "integer"
    FLOAT = "float"
    CHAR = "char"
    VARCHAR = "varchar"
    BOOLEAN = "boolean"
    DATE = "date"
    TIMESTAMP = "timestamp"
    TIMESTAMPTZ = "timestamptz"
    TIME = "time"
    TIMETZ = "timetz"
    VARBINARY = "varbinary"
    BINARY = "binary"
    NUMERIC = "numeric"
    INTERVAL = "interval"

    @classmethod
    def from_string(cls, name: str) -> "ColumnType":
        """
        Parse a type name such as ``Integer`` or ``varchar(32)``

        The parenthesized size is dropped; it is not checked against the
        width stored in the file.

        Raises:
        -------
        SchemaError
            If the name is not a known type
        """
        bare = _PAREN_RE.sub("", name).strip().lower()
        if bare == "int":
            return cls.INTEGER
        try:
            return cls(bare)
        except ValueError:
            raise SchemaError(f"invalid type: {name}") from None


class ColumnConversion(Enum):
    """Optional rendering applied to binary columns"""

    IP_ADDRESS = "ipaddress"
    MAC_ADDRESS = "macaddress"

    @classmethod
    def from_string(cls, name: str) -> Optional["ColumnConversion"]:
        # Unknown conversions are ignored rather than rejected
        try:
            return cls(name.strip().lower())
        except ValueError:
            logger.debug("ignoring unknown conversion %r", name)
            return None


@dataclass(frozen=True)
class Column:
    """One entry of the column types file"""

    type: ColumnType
    name: str = ""
    conversion: Optional[ColumnConversion] = None


@dataclass
class ColumnSchema:
    """Ordered column types, names and conversions supplied by the caller"""

    columns: list[Column] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self) -> Iterator[Column]:
        return iter(self.columns)

    def __getitem__(self, index: int) -> Column:
        return self.columns[index]

    @property
    def types(self) -> list[ColumnType]:
        return [c.type for c in self.columns]

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.columns]

    @property
    def conversions(self) -> list[Optional[ColumnConversion]]:
        return [c.conversion for c in self.columns]

    def has_names(self) -> bool:
        """True when every column has a non-empty name"""
        return all(c.name != "" for c in self.columns)


@dataclass(frozen=True)
class ColumnDefinitions:
    """Column definition header that follows the file signature"""

    header_length: int
    version: int
    number_of_columns: int
    column_widths: tuple[int, ...]

    def is_variable(self, index: int) -> bool:
        return self.column_widths[index] == VARIABLE_WIDTH

    def __str__(self) -> str:
        widths = ", ".join(
            "var" if w == VARIABLE_WIDTH else str(w) for w in self.column_widths
        )
        return (
            "ColumnDefinitions(\n"
            f"  header_length={self.header_length}, version={self.version},\n"
            f"  number_of_columns={self.number_of_columns},\n"
            f"  column_widths=[{widths}]\n"
            ")"
        )


@dataclass(frozen=True)
class Row:
    """Raw column bytes of one row; ``None`` marks a null column"""

    null_values: tuple[bool, ...]
    data: tuple[Optional[bytes], ...]

    def __len__(self) -> int:
        return len(self.data)
