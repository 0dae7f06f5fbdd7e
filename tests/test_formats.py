"""Tests for the format registry and the BaseFormat adapters."""

import io

import pytest

from conftest import EXAMPLE_RECORD, EXAMPLE_XCSOAR, THREE_RECORD_XCSOAR
from flarmnet.core.errors import InvalidEncoding
from flarmnet.core.models import File, Record
from flarmnet.formats import FORMATS, detect_format, get_format
from flarmnet.formats.base import BaseFormat, LXFormat, XCSoarFormat


class TestRegistry:

    def test_known_keys(self):
        assert set(FORMATS) == {"xcsoar", "lx"}

    def test_values_are_classes(self):
        for cls in FORMATS.values():
            assert issubclass(cls, BaseFormat)

    def test_get_format(self):
        assert isinstance(get_format("lx"), LXFormat)
        assert isinstance(get_format("xcsoar"), XCSoarFormat)

    def test_unknown_key(self):
        with pytest.raises(KeyError):
            get_format("winpilot")

    def test_names(self):
        assert get_format("lx").name == "LX"
        assert get_format("xcsoar").name == "XCSoar"


class TestDetectFormat:

    def test_xcsoar(self):
        assert detect_format(EXAMPLE_XCSOAR.encode("ascii")) == "xcsoar"

    def test_lx(self, canonical_lx):
        assert detect_format(canonical_lx) == "lx"

    def test_lx_with_leading_whitespace(self, example_file):
        data = b"\x0b\x0b" + LXFormat().encode(example_file)
        assert detect_format(data) == "lx"

    def test_empty_defaults_to_xcsoar(self):
        assert detect_format(b"") == "xcsoar"


class TestXCSoarFormat:

    def test_decode_bytes(self):
        decoded = XCSoarFormat().decode(THREE_RECORD_XCSOAR.encode("ascii"))
        assert len(decoded.records) == 3

    def test_stray_bytes_become_record_errors(self):
        data = b"00007b\n" + b"\xe9" * 172 + b"\n"
        decoded = XCSoarFormat().decode(data)
        assert decoded.version == 123
        assert len(decoded.errors) == 1

    def test_encode_bytes(self, example_file):
        assert XCSoarFormat().encode(example_file) == EXAMPLE_XCSOAR.encode("ascii")

    def test_write_leaves_sink_open(self, example_file):
        sink = io.BytesIO()
        XCSoarFormat().write(example_file, sink)
        assert not sink.closed
        assert sink.getvalue() == EXAMPLE_XCSOAR.encode("ascii")

    def test_encode_error_propagates(self):
        file = File(version=1, records=[Record(flarm_id="1", frequency="☃")])
        with pytest.raises(InvalidEncoding):
            XCSoarFormat().encode(file)


class TestLXFormat:

    def test_decode(self, canonical_lx):
        assert LXFormat().decode(canonical_lx).records == (EXAMPLE_RECORD,)

    def test_encode(self, example_file, canonical_lx):
        assert LXFormat().encode(example_file) == canonical_lx


class TestCrossFormat:

    def test_xcsoar_to_lx_and_back(self, three_record_file):
        xcsoar = get_format("xcsoar")
        lx = get_format("lx")

        via_lx = lx.decode(lx.encode(xcsoar.decode(xcsoar.encode(three_record_file)).to_file()))
        assert via_lx.to_file() == three_record_file
        assert xcsoar.encode(via_lx.to_file()) == THREE_RECORD_XCSOAR.encode("ascii")
