"""FlarmNet format registry: pick a codec by name.

WHY: The CLI (and any other caller converting files) needs a single
lookup from a format name to the codec that reads and writes it, plus a
way to tell the formats apart when the user does not say which one a
file is in.

HOW: FORMATS maps snake_case keys to BaseFormat subclasses (classes, not
instances). ``detect_format`` deciphers the first bytes of a file: an LX
file then starts with ``<``, an XCSoar file never does.

RULES:
- Keys are used verbatim as CLI choices
- Every format listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from flarmnet.formats import cipher
from flarmnet.formats.base import LXFormat, XCSoarFormat

if TYPE_CHECKING:
    from flarmnet.formats.base import BaseFormat

FORMATS: dict[str, type[BaseFormat]] = {
    "xcsoar": XCSoarFormat,
    "lx": LXFormat,
}

# Bytes inspected by detect_format.
_SNIFF_SIZE = 64


def detect_format(data: bytes) -> str:
    """Guess the FORMATS key of raw file content."""
    head = cipher.decrypt(data[:_SNIFF_SIZE]).lstrip(b"\xef\xbb\xbf \t\r\n")
    if head.startswith(b"<"):
        return "lx"
    return "xcsoar"


def get_format(key: str) -> BaseFormat:
    """Instantiate the format registered under ``key``.

    Raises:
        KeyError: If no format is registered under ``key``.
    """
    return FORMATS[key]()
