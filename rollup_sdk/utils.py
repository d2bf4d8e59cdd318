"""
Utility functions for the rollup SDK.
"""
import logging
import re
from typing import Any, Optional

from eth_typing import ChecksumAddress, HexStr
from hexbytes import HexBytes
from web3 import Web3

from .exceptions import ParseError

logger = logging.getLogger(__name__)

# JSON-RPC quantities: 0x prefix, no leading zeros, at most 256 bits
_QUANTITY_RE = re.compile(r"0[xX](0|[1-9a-fA-F][0-9a-fA-F]*)")
_MAX_QUANTITY_DIGITS = 64
_DATA_RE = re.compile(r"0[xX]([0-9a-fA-F]*)")


def parse_error(message: str, field: Optional[str] = None) -> ParseError:
    """Log a deserialization failure and build the ParseError to raise."""
    logger.error(message)
    return ParseError(message, field=field)


def to_checksum(address: str) -> ChecksumAddress:
    """
    Normalize an address to its EIP-55 checksum form

    All-lowercase and all-uppercase addresses carry no checksum and are
    accepted. Mixed case must be a valid checksum.

    Args:
        address: 0x-prefixed 20-byte hex address

    Returns:
        Checksummed address

    Raises:
        ValueError: If the value is not a valid address or has a bad checksum
    """
    if not isinstance(address, str) or not Web3.is_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    body = address[2:] if address.startswith(("0x", "0X")) else address
    if body != body.lower() and body != body.upper() and not Web3.is_checksum_address(address):
        raise ValueError(f"Invalid address checksum: {address!r}")
    return Web3.to_checksum_address(address)


def hex_to_int(value: Any, field: Optional[str] = None) -> int:
    """
    Decode a JSON-RPC hex quantity (e.g. "0x1a") into an int

    Args:
        value: Raw value from the RPC payload
        field: Name of the field being decoded, used in error messages

    Returns:
        Decoded integer

    Raises:
        ParseError: If the value is not a well-formed hex quantity
    """
    where = f" in {field}" if field else ""
    if not isinstance(value, str):
        raise parse_error(f"Expected hex string{where}, got {type(value).__name__}", field)
    match = _QUANTITY_RE.fullmatch(value)
    if match is None:
        raise parse_error(f"Invalid hex quantity{where}: {value!r}", field)
    digits = match.group(1)
    if len(digits) > _MAX_QUANTITY_DIGITS:
        raise parse_error(f"Hex quantity{where} exceeds 256 bits: {value!r}", field)
    return int(digits, 16)


def int_to_hex(value: int) -> HexStr:
    """Encode a non-negative int as a JSON-RPC hex quantity."""
    if value < 0:
        raise ValueError(f"Quantity must be non-negative, got {value}")
    return HexStr(hex(value))


def hex_to_bytes(value: Any, field: Optional[str] = None, size: Optional[int] = None) -> HexBytes:
    """
    Decode 0x-prefixed hex data, optionally checking its byte length

    Raises:
        ParseError: If the value is not even-length 0x-prefixed hex or has the wrong size
    """
    where = f" in {field}" if field else ""
    match = _DATA_RE.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise parse_error(f"Expected 0x-prefixed hex data{where}, got {value!r}", field)
    digits = match.group(1)
    if len(digits) % 2:
        raise parse_error(f"Odd-length hex data{where}: {value!r}", field)
    data = HexBytes(bytes.fromhex(digits))
    if size is not None and len(data) != size:
        raise parse_error(f"Expected {size} bytes{where}, got {len(data)}", field)
    return data
