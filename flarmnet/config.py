"""Configuration constants and .env loading.

WHY: Default output names, file suffixes and the log level are the only
knobs the converter has. Keeping them here, overridable through the
environment, means neither the CLI nor the tests hardcode them.

HOW: python-dotenv loads the .env file on import. Constants are plain
module-level strings read from os.environ with defaults.

RULES:
- Every environment variable is prefixed with FLARMNET_
- The codecs never read configuration; only the CLI does
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

# Load .env from the working directory (where the CLI is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# File naming
# ---------------------------------------------------------------------------

LX_SUFFIX = ".fln"
"""Suffix given to files written by ``encrypt``."""

XML_SUFFIX = ".xml"
"""Suffix given to files written by ``decrypt``."""

LX_DEFAULT_NAME = os.getenv("FLARMNET_LX_NAME", "lx.fln")
"""File name ``convert --to lx`` writes next to its input by default."""

XCSOAR_DEFAULT_NAME = os.getenv("FLARMNET_XCSOAR_NAME", "data.fln")
"""File name ``convert --to xcsoar`` writes next to its input by default."""

DEFAULT_OUTPUT_NAMES: dict[str, str] = {
    "lx": LX_DEFAULT_NAME,
    "xcsoar": XCSOAR_DEFAULT_NAME,
}

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("FLARMNET_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_log_level(verbose: bool = False) -> int:
    """Map the configured level name to a logging level.

    ``verbose`` forces DEBUG. Unknown names fall back to WARNING.
    """
    if verbose:
        return logging.DEBUG
    level = logging.getLevelName(LOG_LEVEL)
    if not isinstance(level, int):
        return logging.WARNING
    return level
