"""
Utility functions for reading Vertica native binary files
"""

import struct
from typing import BinaryIO

import numpy as np

from .constants import MAGIC_NATIVE


class ByteReader:
    """
    Forward-only cursor over a binary stream

    Every read either returns exactly the requested number of bytes or
    raises EOFError. The cursor never seeks, so any readable stream works
    (files, gzip streams, pipes).
    """

    def __init__(self, file: BinaryIO):
        self.file = file
        self.position = 0

    def read(self, length: int) -> bytes:
        """Read exactly ``length`` bytes"""
        if length == 0:
            return b""
        data = self.file.read(length)
        if data is None or len(data) < length:
            got = 0 if not data else len(data)
            raise EOFError(f"expected {length} bytes at offset {self.position}, got {got}")
        self.position += length
        return data

    def read_u8(self) -> int:
        return self.read(1)[0]

    def read_u16(self) -> int:
        return struct.unpack("<H", self.read(2))[0]

    def read_u32(self) -> int:
        return struct.unpack("<I", self.read(4))[0]


def check_magic(data: bytes) -> bool:
    """
    Compare a signature against the native file magic bytes

    Parameters:
    -----------
    data : bytes
        Bytes read from the start of the file

    Returns:
    --------
    bool
        True if every byte matches, stopping at the first mismatch
    """
    if len(data) != len(MAGIC_NATIVE):
        return False
    for expected, value in zip(MAGIC_NATIVE, data):
        if expected != value:
            return False
    return True


def le_int(data: bytes, signed: bool = True) -> int:
    """
    Decode a 1, 2, 4 or 8 byte little-endian integer

    Raises:
    -------
    ValueError
        If the width is not 1, 2, 4 or 8 bytes
    """
    width = len(data)
    if width not in (1, 2, 4, 8):
        raise ValueError(f"Invalid integer width {width}")
    dtype = np.dtype(f"<{'i' if signed else 'u'}{width}")
    return int(np.frombuffer(data, dtype=dtype)[0])


def le_words(data: bytes) -> list[int]:
    """Split bytes into unsigned 64-bit little-endian words, ignoring any remainder"""
    count = len(data) // 8
    return [int(w) for w in np.frombuffer(data[: count * 8], dtype="<u8")]


def trunc_divmod(a: int, b: int) -> tuple[int, int]:
    """divmod rounding the quotient toward zero; the remainder takes the sign of ``a``"""
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q, a - q * b
