"""
Rendering of binary columns as network addresses
"""

import ipaddress
import logging
from typing import Optional

from .types import ColumnConversion

logger = logging.getLogger(__name__)

# IPv4 values are stored behind two 0xFF marker bytes
IPV4_MARKER = b"\xff\xff"
IPV6_LENGTH = 16


def to_hex(data: bytes, sep: str = "") -> str:
    """Two-digit uppercase hex of every byte"""
    return sep.join(f"{b:02X}" for b in data)


def to_mac_address(data: bytes) -> str:
    return to_hex(data, ":")


def to_ip_address(data: bytes) -> str:
    """
    Render bytes as an IPv4 or IPv6 address

    Bytes starting with ``FF FF`` hold an IPv4 address in the remaining
    bytes; anything else is an IPv6 address, zero-padded or truncated to
    16 bytes. Input that cannot be parsed renders as an empty string.
    """
    if data[:2] == IPV4_MARKER:
        try:
            value = int(to_hex(data[2:]), 16)
            return str(ipaddress.IPv4Address(value))
        except ValueError as e:
            logger.warning("error: cannot convert %s to an IPv4 address: %s", to_hex(data), e)
            return ""

    padded = data[:IPV6_LENGTH].ljust(IPV6_LENGTH, b"\x00")
    try:
        return str(ipaddress.IPv6Address(padded))
    except ValueError as e:
        logger.warning("error: cannot convert %s to an IPv6 address: %s", to_hex(data), e)
        return ""


def convert(conversion: Optional[ColumnConversion], data: bytes) -> str:
    if conversion is ColumnConversion.IP_ADDRESS:
        return to_ip_address(data)
    if conversion is ColumnConversion.MAC_ADDRESS:
        return to_mac_address(data)
    raise ValueError(f"Unknown conversion {conversion}")
