"""Strict hexadecimal numeral parsing.

WHY: File versions and FLARM ids are both stored as hex numerals, and
both decoders must reject anything that is not one. Python's
``int(value, 16)`` is too lenient for that: it accepts a ``0x`` prefix,
underscores, a minus sign and surrounding whitespace.

HOW: A full-match regex on the hex digit alphabet, then a range check
against the unsigned 32-bit limit both formats store these numbers in.

RULES:
- Case-insensitive; optional leading "+"; at least one digit; nothing
  else allowed
- Values above 0xFFFFFFFF are not valid numerals
"""

from __future__ import annotations

import re
from typing import Optional

U32_MAX = 0xFFFFFFFF

_HEX_RE = re.compile(r"\+?[0-9A-Fa-f]+")


def parse_hex(value: str) -> Optional[int]:
    """Parse ``value`` as an unsigned 32-bit hex numeral.

    Returns None when the text is not one, so callers can raise the
    error that fits their context.
    """
    if not _HEX_RE.fullmatch(value):
        return None
    number = int(value, 16)
    if number > U32_MAX:
        return None
    return number


def is_hex(value: str) -> bool:
    return parse_hex(value) is not None


def format_version(version: int) -> str:
    """Format a file version the way both encoders write it.

    Lowercase hex, zero-padded to at least six digits.
    """
    return f"{version:06x}"
