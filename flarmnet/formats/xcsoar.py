"""XCSoar fixed-width FlarmNet format.

WHY: XCSoar, LX Navigation, WinPilot, LK8000 and ClearNav read FlarmNet
data as a flat text file: a hex version line followed by one line per
aircraft, where every character of every field is stored as two hex
digits. This module turns such text into the FlarmNet model and back.

HOW: Decoding splits the text into lines, parses the first as the
version and decodes every remaining non-empty line on its own, catching
RecordError so one corrupt line becomes one failed RecordResult. Field
boundaries come from ``fields.FIELDS``. Encoding goes through Writer,
which streams field by field into any text sink.

RULES:
- Line 1: hex version, no ``0x``; written as ``{version:06x}``
- Record lines: exactly LINE_LENGTH (172) hex digits, fields in FIELDS order
- Field text is Latin-1; decoded fields are stripped of Unicode
  whitespace (FIELD_WHITESPACE) on both ends
- Values longer than a field are truncated; shorter ones are padded
  with hex-encoded spaces ("20")
- Encoding stops at the first non-Latin-1 value; text already written
  to a streaming sink stays written
"""

from __future__ import annotations

import io
import logging
import re
from typing import Dict, List, TextIO

from flarmnet.core.errors import (
    InvalidEncoding,
    InvalidFlarmId,
    InvalidVersion,
    MissingVersion,
    RecordError,
    UnexpectedCharacter,
    UnexpectedLineLength,
)
from flarmnet.core.hexnum import format_version, is_hex, parse_hex
from flarmnet.core.models import DecodedFile, File, Record, RecordResult
from flarmnet.formats.fields import FIELDS, LINE_LENGTH

logger = logging.getLogger(__name__)

# Hex encoding of the ASCII space used to pad short fields.
_PADDING = b" ".hex()

_HEX_PAIRS_RE = re.compile(r"(?:[0-9A-Fa-f]{2})*")

# Unicode White_Space characters within Latin-1. str.strip() would also
# remove the \x1c-\x1f separators, which are not White_Space.
FIELD_WHITESPACE = "\t\n\x0b\x0c\r \x85\xa0"


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode_file(text: str) -> DecodedFile:
    """Decode a whole XCSoar FlarmNet file.

    Args:
        text: The file content.

    Returns:
        The file version and one RecordResult per non-empty record line,
        in line order.

    Raises:
        MissingVersion: If ``text`` has no lines at all.
        InvalidVersion: If the first line is not a hex numeral.
    """
    lines = _split_lines(text)
    if not lines:
        raise MissingVersion()

    version = parse_hex(lines[0])
    if version is None:
        raise InvalidVersion(lines[0])

    results: List[RecordResult] = []
    for line_no, line in enumerate(lines[1:], start=2):
        if not line:
            continue
        try:
            results.append(RecordResult.success(decode_record(line)))
        except RecordError as exc:
            logger.debug("Line %d: %s", line_no, exc)
            results.append(RecordResult.failure(exc))

    decoded = DecodedFile(version=version, results=results)
    logger.debug(
        "Decoded XCSoar file version %d: %d records, %d errors",
        version, len(decoded.records), len(decoded.errors),
    )
    return decoded


def decode_record(line: str) -> Record:
    """Decode a single record line.

    Raises:
        UnexpectedLineLength: If the line is not exactly LINE_LENGTH long.
        UnexpectedCharacter: If a field holds something other than hex pairs.
        InvalidFlarmId: If the decoded id is not a hex numeral.
    """
    if len(line) != LINE_LENGTH:
        raise UnexpectedLineLength(len(line))

    values: Dict[str, str] = {}
    for field in FIELDS:
        values[field.name] = _decode_str(line[field.slice])
        if field.name == "flarm_id" and not is_hex(values[field.name]):
            raise InvalidFlarmId(values[field.name])

    return Record(**values)


def _split_lines(text: str) -> List[str]:
    """Split on ``\\n`` and drop a trailing ``\\r`` from each line.

    An empty string has no lines; a trailing newline does not start a
    new one.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _decode_str(value: str) -> str:
    if not _HEX_PAIRS_RE.fullmatch(value):
        raise UnexpectedCharacter(value)
    return bytes.fromhex(value).decode("latin-1").strip(FIELD_WHITESPACE)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


class Writer:
    """Streams a File into a text sink in XCSoar layout.

    WHY: Large registries can be written straight to an open file
    without building the whole document in memory first.

    RULES:
    - ``sink`` is any object with a text ``write(str)`` method
    - Output is written field by field; a failing field leaves the
      preceding output in the sink
    """

    def __init__(self, sink: TextIO) -> None:
        self._sink = sink

    def write(self, file: File) -> None:
        self.write_version(file.version)
        for record in file.records:
            self.write_record(record)

    def write_version(self, version: int) -> None:
        self._sink.write(format_version(version))
        self._sink.write("\n")

    def write_record(self, record: Record) -> None:
        for field in FIELDS:
            self._sink.write(encode_str(getattr(record, field.name), field.length))
        self._sink.write("\n")


def encode_str(value: str, length: int) -> str:
    """Hex-encode ``value`` into a field ``length`` characters wide.

    Raises:
        InvalidEncoding: If ``value`` has characters outside Latin-1.
    """
    try:
        raw = value.encode("latin-1")
    except UnicodeEncodeError:
        raise InvalidEncoding(value) from None

    taken = raw[:length]
    return taken.hex() + _PADDING * (length - len(taken))


def encode_file(file: File) -> str:
    """Encode a whole File as XCSoar text.

    Raises:
        InvalidEncoding: If any field value has characters outside Latin-1.
    """
    buffer = io.StringIO()
    Writer(buffer).write(file)
    return buffer.getvalue()
