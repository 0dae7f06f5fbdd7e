"""Shared test fixtures for the flarmnet test suite.

WHY: Most test modules need the same reference data: the one-record
example from the FlarmNet format documentation and a three-record
XCSoar file with a non-ASCII pilot name. Centralizing them here keeps
the literal hex and XML in one place.

HOW: Module-level constants hold the literal file contents; fixtures
hand out the constants and the matching File/Record objects.

RULES:
- EXAMPLE_LINE and CANONICAL_XML describe the same single record
- THREE_RECORD_XCSOAR is version 0x006fb0 (28592)
- Fixtures return fresh objects; constants are never mutated
"""

import pytest

from flarmnet.core.models import File, Record
from flarmnet.formats import cipher


# ---------------------------------------------------------------------------
# One-record example (version 123)
# ---------------------------------------------------------------------------

EXAMPLE_RECORD = Record(
    flarm_id="3EE3C7",
    pilot_name="Tobias Bieniek",
    airfield="EDKA",
    plane_type="LS6a",
    registration="D-0816",
    call_sign="SG",
    frequency="130.530",
)

EXAMPLE_LINE = (
    "334545334337546f62696173204269656e69656b2020202020202045444b41202020202020202020"
    "20202020202020204c5336612020202020202020202020202020202020442d303831362053472031"
    "33302e353330"
)

EXAMPLE_XCSOAR = "00007b\n" + EXAMPLE_LINE + "\n"

CANONICAL_XML = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<FLARMNET Version="00007b">\n'
    '<FLARMDATA FlarmID="3EE3C7">\n'
    "\t<NAME>Tobias Bieniek</NAME>\n"
    "\t<AIRFIELD>EDKA</AIRFIELD>\n"
    "\t<TYPE>LS6a</TYPE>\n"
    "\t<REG>D-0816</REG>\n"
    "\t<COMPID>SG</COMPID>\n"
    "\t<FREQUENCY>130.530</FREQUENCY>\n"
    "</FLARMDATA>\n"
    "</FLARMNET>"
)


# ---------------------------------------------------------------------------
# Three-record XCSoar file
# ---------------------------------------------------------------------------

MUELLER_LINE = (
    "3030303030304dfc6c6c6572202020202020202020202020202020442d3231383820202020202020"
    "202020202020202041534b2d3133202020202020202020202020202020442d323138382020202031"
    "32332e313530"
)

THREE_RECORD_XCSOAR = (
    "006fb0\n"
    + MUELLER_LINE + "\n"
    "30303030303120202020202020202020202020202020202020202030303030303020202020202020"
    "202020202020202050617261676c6964657220202020202020202020203030303030302020202020"
    "202020202020\n"
    "303030303066202020202020202020202020202020202020202020442d3935323720202020202020"
    "2020202020202020415357203237202020202020202020202020202020442d393532372058323720"
    "202020202020\n"
)

THREE_RECORDS = (
    Record(
        flarm_id="000000",
        pilot_name="Müller",
        airfield="D-2188",
        plane_type="ASK-13",
        registration="D-2188",
        call_sign="",
        frequency="123.150",
    ),
    Record(
        flarm_id="000001",
        pilot_name="",
        airfield="000000",
        plane_type="Paraglider",
        registration="000000",
        call_sign="",
        frequency="",
    ),
    Record(
        flarm_id="00000f",
        pilot_name="",
        airfield="D-9527",
        plane_type="ASW 27",
        registration="D-9527",
        call_sign="X27",
        frequency="",
    ),
)


@pytest.fixture
def example_record():
    return EXAMPLE_RECORD


@pytest.fixture
def example_file():
    """Version 123 with the single example record."""
    return File(version=123, records=[EXAMPLE_RECORD])


@pytest.fixture
def example_xcsoar():
    return EXAMPLE_XCSOAR


@pytest.fixture
def canonical_lx():
    """The canonical XML document, enciphered as an LX device expects it."""
    return cipher.encrypt(CANONICAL_XML.encode("utf-8"))


@pytest.fixture
def three_record_file():
    return File(version=0x006FB0, records=THREE_RECORDS)


def encrypt_xml(xml: str) -> bytes:
    """Encipher hand-written XML for LX decoder tests."""
    return cipher.encrypt(xml.encode("utf-8"))
