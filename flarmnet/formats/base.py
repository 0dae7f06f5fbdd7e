"""Abstract base format and the two concrete codec adapters.

WHY: The CLI converts between formats chosen at run time, so it needs
one interface over both codecs: bytes in, DecodedFile out, and File in,
bytes out. The codec modules keep their natural signatures (text for
XCSoar, bytes for LX); the classes here adapt them to that interface.

HOW: BaseFormat is an ABC with a ``name`` property and decode/encode/
write methods. XCSoarFormat and LXFormat delegate to the codec modules.

RULES:
- ``decode`` takes raw file bytes; ``encode`` returns raw file bytes
- ``write`` streams into a binary sink and leaves it open
- XCSoar text is ASCII on the wire (hex digits and newlines only)
"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import BinaryIO

from flarmnet.core.models import DecodedFile, File
from flarmnet.formats import lx, xcsoar


class BaseFormat(ABC):
    """Abstract base for FlarmNet file formats.

    To add a new format:
    1. Write the codec module in formats/
    2. Subclass BaseFormat and implement name/decode/write
    3. Register it in FORMATS in formats/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'XCSoar'."""

    @abstractmethod
    def decode(self, data: bytes) -> DecodedFile:
        """Decode raw file content."""

    @abstractmethod
    def write(self, file: File, sink: BinaryIO) -> None:
        """Stream ``file`` into a binary sink."""

    def encode(self, file: File) -> bytes:
        buffer = io.BytesIO()
        self.write(file, buffer)
        return buffer.getvalue()


class XCSoarFormat(BaseFormat):
    """Hex fixed-width text read by XCSoar, LK8000, WinPilot and ClearNav."""

    @property
    def name(self) -> str:
        return "XCSoar"

    def decode(self, data: bytes) -> DecodedFile:
        # Latin-1 maps every byte, so stray bytes surface as per-line errors.
        return xcsoar.decode_file(data.decode("latin-1"))

    def write(self, file: File, sink: BinaryIO) -> None:
        xcsoar.Writer(_AsciiSink(sink)).write(file)


class LXFormat(BaseFormat):
    """Enciphered XML read by LXNav and Naviter devices."""

    @property
    def name(self) -> str:
        return "LX"

    def decode(self, data: bytes) -> DecodedFile:
        return lx.decode_file(data)

    def write(self, file: File, sink: BinaryIO) -> None:
        lx.Writer(sink).write(file)


class _AsciiSink:
    """Text-to-binary shim so xcsoar.Writer can stream into a byte sink."""

    def __init__(self, sink: BinaryIO) -> None:
        self._sink = sink

    def write(self, text: str) -> int:
        self._sink.write(text.encode("ascii"))
        return len(text)
