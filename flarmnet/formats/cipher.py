"""Byte-shift cipher used by the LX file format.

WHY: LXNav/Naviter FlarmNet files are plain UTF-8 XML with every byte
shifted up by one. The shift is reversible and keyless, so the same two
primitives serve the LX codec, the ``decrypt``/``encrypt`` CLI commands
and anything else that needs to peek inside an LX file.

HOW: Whole-buffer transforms use ``bytes.translate`` with two 256-entry
tables built once at import. Reader and Writer are ``io.RawIOBase``
adapters that apply the same tables to every chunk flowing through a
wrapped source or sink, so they compose with files, sockets, BytesIO or
any other object that has ``read``/``write``.

RULES:
- encrypt(b) = (b + 1) % 256, decrypt(b) = (b - 1) % 256, exact wraparound
- Adapters add no buffering; they transform what the wrapped object
  returns or accepts
- EOF (b""), "no data yet" (None), short writes and exceptions from the
  wrapped object pass straight through
- Closing an adapter closes the wrapped object unless closefd=False
"""

from __future__ import annotations

import io
from typing import Any, Optional

_ENCRYPT_TABLE = bytes((b + 1) % 256 for b in range(256))
_DECRYPT_TABLE = bytes((b - 1) % 256 for b in range(256))


def encrypt(data: bytes) -> bytes:
    """Shift every byte of ``data`` up by one (mod 256)."""
    return bytes(data).translate(_ENCRYPT_TABLE)


def decrypt(data: bytes) -> bytes:
    """Shift every byte of ``data`` down by one (mod 256)."""
    return bytes(data).translate(_DECRYPT_TABLE)


class Reader(io.RawIOBase):
    """Readable stream that deciphers bytes pulled from ``source``.

    ``source`` needs a ``read(size)`` method returning bytes (or None
    for a non-blocking source with nothing available).
    """

    def __init__(self, source: Any, closefd: bool = True) -> None:
        super().__init__()
        self._source = source
        self._closefd = closefd

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Any) -> Optional[int]:
        view = memoryview(buffer).cast("B")
        data = self._source.read(len(view))
        if data is None:
            return None
        size = len(data)
        view[:size] = decrypt(data)
        return size

    def close(self) -> None:
        if self.closed:
            return
        try:
            close = getattr(self._source, "close", None)
            if self._closefd and close is not None:
                close()
        finally:
            super().close()


class Writer(io.RawIOBase):
    """Writable stream that enciphers bytes before pushing them to ``sink``.

    ``sink`` needs a ``write(data)`` method. Its return value is passed
    back to the caller, so a short write on the sink is a short write
    here too. A sink returning None is taken to have accepted the whole
    chunk.
    """

    def __init__(self, sink: Any, closefd: bool = True) -> None:
        super().__init__()
        self._sink = sink
        self._closefd = closefd

    def writable(self) -> bool:
        return True

    def write(self, data: Any) -> Optional[int]:
        if self.closed:
            raise ValueError("write to closed file")
        chunk = encrypt(data)
        written = self._sink.write(chunk)
        if written is None:
            return len(chunk)
        return written

    def flush(self) -> None:
        super().flush()
        flush = getattr(self._sink, "flush", None)
        if flush is not None:
            flush()

    def close(self) -> None:
        if self.closed:
            return
        # IOBase.close flushes, which must reach the sink before it is closed.
        try:
            super().close()
        finally:
            close = getattr(self._sink, "close", None)
            if self._closefd and close is not None:
                close()
