"""Database connection and address helpers shared across modules."""

from __future__ import annotations

import logging
import re
from typing import Any

from ..errors import MalformedInput

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def safe_close(
    conn: Any,
    *,
    logger: logging.Logger | None = None,
    warn_message: str | None = None,
) -> None:
    """Close a connection and optionally warn on failure."""
    if conn is None:
        return
    try:
        conn.close()
    except Exception:  # pylint: disable=broad-exception-caught
        if logger is not None:
            logger.warning(warn_message or "DB close failed")


def normalize_address(address: Any) -> str:
    """Validate a hex address and return it lowercased."""
    if not isinstance(address, str) or not _ADDRESS_RE.match(address):
        raise MalformedInput(f"Invalid address: {address!r}")
    return address.lower()


def to_buffer(address: str) -> bytes:
    """Encode a hex address as the raw bytes stored in bytea columns."""
    return bytes.fromhex(normalize_address(address)[2:])


def from_buffer(value: bytes | memoryview) -> str:
    """Decode a bytea column value into a lowercase hex address."""
    return "0x" + bytes(value).hex()
