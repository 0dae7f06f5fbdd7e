"""Exception hierarchy for decoding and encoding FlarmNet files.

WHY: Callers need to tell apart three kinds of failure: problems that
make a whole file unusable (no version, broken XML), problems that only
spoil one record (a bad line, a missing id), and values that cannot be
written in the target encoding. Typed exceptions let the decoders catch
exactly the record-level ones and let everything else propagate.

HOW: Everything derives from FlarmnetError. DecodeError splits into
FileError (raised to the caller) and RecordError (captured per record in
a RecordResult). EncodeError covers write-time constraints.

RULES:
- Offending values are stored on the exception and shown in the message
- Wrapped parser/codec errors keep the original as ``cause`` and
  ``__cause__``
- I/O errors from caller streams are never wrapped
"""

from __future__ import annotations


class FlarmnetError(Exception):
    """Base class for all errors raised by this package."""


# ---------------------------------------------------------------------------
# Decode errors
# ---------------------------------------------------------------------------


class DecodeError(FlarmnetError):
    """Raised when input cannot be decoded into the FlarmNet model."""


class FileError(DecodeError):
    """A decode failure that makes the whole file unusable."""


class RecordError(DecodeError):
    """A decode failure confined to a single record.

    Decoders never raise these out of ``decode_file``; they are stored
    on the record's RecordResult instead.
    """


class MissingVersion(FileError):
    def __init__(self) -> None:
        super().__init__("missing file version")


class InvalidVersion(FileError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"invalid file version: {value!r}")


class MissingElement(FileError):
    """The XML document lacks a required element."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"missing XML element: {name}")


class XmlError(FileError):
    """The deciphered document is not well-formed XML."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"malformed XML: {cause}")


class InvalidText(FileError):
    """The deciphered bytes are not valid UTF-8."""

    def __init__(self, cause: UnicodeDecodeError) -> None:
        self.cause = cause
        super().__init__(f"invalid UTF-8 after deciphering: {cause}")


class UnexpectedLineLength(RecordError):
    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"unexpected line length: {length} characters")


class UnexpectedCharacter(RecordError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"unexpected character(s): {value!r}")


class MissingFlarmId(RecordError):
    def __init__(self) -> None:
        super().__init__("missing FLARM id")


class InvalidFlarmId(RecordError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"invalid FLARM id: {value!r}")


# ---------------------------------------------------------------------------
# Encode errors
# ---------------------------------------------------------------------------


class EncodeError(FlarmnetError):
    """Raised when a File cannot be written in the target encoding."""


class InvalidEncoding(EncodeError):
    """A field value has characters outside Latin-1."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"invalid encoding: {value!r}")


class InvalidXmlCharacter(EncodeError):
    """A field value has a character XML 1.0 cannot carry."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"character not allowed in XML: {value!r}")
