"""LXNav/Naviter FlarmNet format: XML behind a byte-shift cipher.

WHY: LX devices read FlarmNet data as an XML document in which every
byte has been shifted up by one (see ``cipher``). This module turns such
files into the FlarmNet model and back, producing output that the
devices accept and that survives a decode/encode cycle byte for byte.

HOW: Decoding deciphers the bytes, checks they are UTF-8, parses them
with ``xml.etree.ElementTree`` and converts each FLARMDATA child on its
own, catching RecordError so a bad element becomes a failed
RecordResult. Encoding is done by Writer, which emits the document as a
sequence of small UTF-8 chunks through ``cipher.Writer``, so the whole
document never has to sit in memory.

RULES:
- Root element must be named exactly FLARMNET with a hex Version attribute
- Each FLARMDATA needs a hex FlarmID attribute (any number of digits)
- NAME/AIRFIELD/TYPE/REG/COMPID/FREQUENCY are optional on input (default
  ""), always written on output, and their text is kept verbatim
- Element names are matched on their local name, ignoring namespaces
- Output layout is fixed: declaration, newline, root, newline, and one
  tab before each field element; ``& < > ' "`` are escaped as entities
  and ``\\r`` as ``&#13;`` so it survives line-end normalization
- Values with characters XML 1.0 forbids raise InvalidXmlCharacter
- Malformed XML, invalid UTF-8 and a missing root abort the whole file
"""

from __future__ import annotations

import io
import logging
import re
import xml.etree.ElementTree as ET
from typing import Any, BinaryIO, List, Optional, Tuple
from xml.sax.saxutils import escape

from flarmnet.core.errors import (
    InvalidFlarmId,
    InvalidText,
    InvalidVersion,
    InvalidXmlCharacter,
    MissingElement,
    MissingFlarmId,
    MissingVersion,
    RecordError,
    XmlError,
)
from flarmnet.core.hexnum import format_version, is_hex, parse_hex
from flarmnet.core.models import DecodedFile, File, Record, RecordResult
from flarmnet.formats import cipher

logger = logging.getLogger(__name__)

ROOT_ELEMENT = "FLARMNET"
RECORD_ELEMENT = "FLARMDATA"
VERSION_ATTRIBUTE = "Version"
FLARM_ID_ATTRIBUTE = "FlarmID"

# Record attribute -> child element name, in output order.
CHILD_ELEMENTS: Tuple[Tuple[str, str], ...] = (
    ("pilot_name", "NAME"),
    ("airfield", "AIRFIELD"),
    ("plane_type", "TYPE"),
    ("registration", "REG"),
    ("call_sign", "COMPID"),
    ("frequency", "FREQUENCY"),
)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_ENTITIES = {"'": "&apos;", '"': "&quot;", "\r": "&#13;"}

# Characters outside the XML 1.0 Char production (plus lone surrogates).
_INVALID_XML_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode_file(data: bytes) -> DecodedFile:
    """Decode a whole LX FlarmNet file.

    Args:
        data: The enciphered file content.

    Returns:
        The file version and one RecordResult per FLARMDATA element, in
        document order.

    Raises:
        InvalidText: If the deciphered bytes are not UTF-8.
        XmlError: If the deciphered text is not well-formed XML.
        MissingElement: If the root element is not FLARMNET.
        MissingVersion: If the root has no Version attribute.
        InvalidVersion: If Version is not a hex numeral.
    """
    return _decode_plain(cipher.decrypt(data))


def read_file(source: BinaryIO) -> DecodedFile:
    """Decode an LX file from a readable binary stream.

    The stream is deciphered through ``cipher.Reader`` while it is read
    and is left open.
    """
    with cipher.Reader(source, closefd=False) as reader:
        plain = reader.readall()
    return _decode_plain(plain or b"")


def _decode_plain(plain: bytes) -> DecodedFile:
    try:
        text = plain.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidText(exc) from exc

    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise XmlError(exc) from exc

    if _local_name(root.tag) != ROOT_ELEMENT:
        raise MissingElement(ROOT_ELEMENT)

    raw_version = root.get(VERSION_ATTRIBUTE)
    if raw_version is None:
        raise MissingVersion()
    version = parse_hex(raw_version)
    if version is None:
        raise InvalidVersion(raw_version)

    results: List[RecordResult] = []
    for index, child in enumerate(_children(root, RECORD_ELEMENT)):
        try:
            results.append(RecordResult.success(convert(child)))
        except RecordError as exc:
            logger.debug("%s #%d: %s", RECORD_ELEMENT, index + 1, exc)
            results.append(RecordResult.failure(exc))

    decoded = DecodedFile(version=version, results=results)
    logger.debug(
        "Decoded LX file version %d: %d records, %d errors",
        version, len(decoded.records), len(decoded.errors),
    )
    return decoded


def convert(element: ET.Element) -> Record:
    """Convert one FLARMDATA element into a Record.

    Expected structure::

        <FLARMDATA FlarmID="000001">
          <NAME></NAME>
          <AIRFIELD>000000</AIRFIELD>
          <TYPE>Paraglider</TYPE>
          <REG>000000</REG>
          <COMPID></COMPID>
          <FREQUENCY></FREQUENCY>
        </FLARMDATA>

    Raises:
        MissingFlarmId: If the FlarmID attribute is absent.
        InvalidFlarmId: If FlarmID is not a hex numeral.
    """
    flarm_id = element.get(FLARM_ID_ATTRIBUTE)
    if flarm_id is None:
        raise MissingFlarmId()
    if not is_hex(flarm_id):
        raise InvalidFlarmId(flarm_id)

    values = {
        attribute: _child_text(element, tag)
        for attribute, tag in CHILD_ELEMENTS
    }
    return Record(flarm_id=flarm_id, **values)


def _local_name(tag: Any) -> Optional[str]:
    # Comments and processing instructions have a callable tag.
    if not isinstance(tag, str):
        return None
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> List[ET.Element]:
    return [child for child in element if _local_name(child.tag) == name]


def _child_text(element: ET.Element, name: str) -> str:
    """Concatenated direct text of the first child called ``name``, or ""."""
    for child in _children(element, name):
        parts = [child.text or ""]
        parts.extend(sub.tail or "" for sub in child)
        return "".join(parts)
    return ""


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


class Writer:
    """Streams a File into a binary sink in LX layout.

    WHY: LX output is written straight to device files; enciphering
    chunk by chunk avoids holding the document twice in memory.

    RULES:
    - ``sink`` is any object with a binary ``write(bytes)`` method
    - Every chunk is fully written before the next one (short writes
      are retried); a sink that takes no bytes raises OSError
    - The sink is flushed but never closed
    """

    def __init__(self, sink: BinaryIO) -> None:
        self._stream = cipher.Writer(sink, closefd=False)

    def write(self, file: File) -> None:
        self._write(XML_DECLARATION)
        self._write(
            f"\n<{ROOT_ELEMENT} {VERSION_ATTRIBUTE}={_quote(format_version(file.version))}>"
        )
        for record in file.records:
            self.write_record(record)
        self._write(f"\n</{ROOT_ELEMENT}>")
        self._stream.flush()

    def write_record(self, record: Record) -> None:
        self._write(f"\n<{RECORD_ELEMENT} {FLARM_ID_ATTRIBUTE}={_quote(record.flarm_id)}>")
        for attribute, tag in CHILD_ELEMENTS:
            text = _escape(getattr(record, attribute))
            self._write(f"\n\t<{tag}>{text}</{tag}>")
        self._write(f"\n</{RECORD_ELEMENT}>")

    def _write(self, text: str) -> None:
        view = memoryview(text.encode("utf-8"))
        while view:
            written = self._stream.write(view)
            if not written:
                raise OSError("sink accepted no bytes")
            view = view[written:]


def _escape(value: str) -> str:
    """Escape ``value`` for text or attribute content.

    Raises:
        InvalidXmlCharacter: If ``value`` cannot be represented in XML 1.0.
    """
    if _INVALID_XML_RE.search(value):
        raise InvalidXmlCharacter(value)
    return escape(value, _ENTITIES)


def _quote(value: str) -> str:
    return '"' + _escape(value) + '"'


def encode_file(file: File) -> bytes:
    """Encode a whole File as an enciphered LX document."""
    buffer = io.BytesIO()
    Writer(buffer).write(file)
    return buffer.getvalue()
