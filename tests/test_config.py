"""Tests for flarmnet.config."""

import logging

from flarmnet import config


class TestResolveLogLevel:

    def test_verbose_forces_debug(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "ERROR")
        assert config.resolve_log_level(verbose=True) == logging.DEBUG

    def test_named_level(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "INFO")
        assert config.resolve_log_level() == logging.INFO

    def test_unknown_name_falls_back_to_warning(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "CHATTY")
        assert config.resolve_log_level() == logging.WARNING


class TestDefaults:

    def test_output_names_cover_every_format(self):
        from flarmnet.formats import FORMATS

        assert set(config.DEFAULT_OUTPUT_NAMES) == set(FORMATS)

    def test_suffixes(self):
        assert config.LX_SUFFIX == ".fln"
        assert config.XML_SUFFIX == ".xml"
