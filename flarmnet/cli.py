"""Command-line interface for the FlarmNet converter.

WHY: Pilots and device maintainers get FlarmNet files in one layout and
need them in the other, or want to look inside an LX file. The CLI
wires the codecs to files on disk behind four small commands.

HOW: argparse with one sub-command per task:
  decrypt  - stream an LX file through cipher.Reader into plain XML
  encrypt  - stream plain XML through cipher.Writer into an LX file
  convert  - decode with one format, drop bad records, encode with another
  info     - print version, record count and per-record errors
Status messages go to stderr; ``info`` prints its report to stdout.

RULES:
- This is the only module that opens files
- Source format is auto-detected unless --from is given
- Records that fail to decode are skipped with one warning each
- FlarmnetError and OSError end the run with exit status 1
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path
from typing import List, Optional

from flarmnet import __version__
from flarmnet.config import (
    DEFAULT_OUTPUT_NAMES,
    LOG_FORMAT,
    LX_SUFFIX,
    XML_SUFFIX,
    resolve_log_level,
)
from flarmnet.core.errors import FlarmnetError
from flarmnet.core.models import DecodedFile
from flarmnet.formats import FORMATS, cipher, detect_format, get_format

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr, keeping stdout pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _decode_input(path: Path, source_format: Optional[str]) -> tuple:
    """Read and decode ``path``, detecting its format when not given.

    Returns:
        Tuple of (format key, DecodedFile).
    """
    data = path.read_bytes()
    key = source_format or detect_format(data)
    logger.debug("Reading %s as %s", path, key)
    return key, get_format(key).decode(data)


def _warn_record_errors(decoded: DecodedFile, path: Path) -> None:
    for index, result in enumerate(decoded.results, start=1):
        if result.error is not None:
            logger.warning("%s: skipping record %d: %s", path.name, index, result.error)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_decrypt(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else input_path.with_suffix(XML_SUFFIX)

    with open(input_path, "rb") as source, open(output_path, "wb") as output:
        shutil.copyfileobj(cipher.Reader(source, closefd=False), output)

    _status("Decrypted {} -> {}".format(input_path, output_path))


def cmd_encrypt(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else input_path.with_suffix(LX_SUFFIX)

    with open(input_path, "rb") as source, open(output_path, "wb") as output:
        with cipher.Writer(output, closefd=False) as writer:
            shutil.copyfileobj(source, writer)

    _status("Encrypted {} -> {}".format(input_path, output_path))


def cmd_convert(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    source_key, decoded = _decode_input(input_path, args.source)
    _warn_record_errors(decoded, input_path)

    if args.output:
        output_path = Path(args.output)
    else:
        output_path = input_path.with_name(DEFAULT_OUTPUT_NAMES[args.target])
    if output_path.resolve() == input_path.resolve():
        raise FlarmnetError("refusing to overwrite the input file {}".format(input_path))

    file = decoded.to_file()
    target = get_format(args.target)
    with open(output_path, "wb") as output:
        target.write(file, output)

    _status("Converted {} ({}) -> {} ({}): {} records, {} skipped".format(
        input_path, source_key, output_path, args.target,
        len(file.records), len(decoded.errors),
    ))


def cmd_info(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    key, decoded = _decode_input(input_path, args.source)

    print("Format:  {}".format(get_format(key).name))
    print("Version: {} (0x{:06x})".format(decoded.version, decoded.version))
    print("Records: {}".format(len(decoded.records)))
    print("Errors:  {}".format(len(decoded.errors)))
    for index, result in enumerate(decoded.results, start=1):
        if result.error is not None:
            print("  #{}: {}".format(index, result.error))


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    RULES:
    - Sub-commands: decrypt, encrypt, convert, info
    - --from/--to choices come from the FORMATS registry
    """
    format_keys = sorted(FORMATS.keys())

    parser = argparse.ArgumentParser(
        prog="flarmnet",
        description="Convert FlarmNet files between the XCSoar and LX formats.",
    )
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output, including every rejected record.",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    decrypt = commands.add_parser("decrypt", help="Decipher an LX file into plain XML.")
    decrypt.add_argument("input", help="Path to the LX format FLN file.")
    decrypt.add_argument(
        "--output",
        default=None,
        help="Path for the XML file (default: input with {} suffix).".format(XML_SUFFIX),
    )
    decrypt.set_defaults(handler=cmd_decrypt)

    encrypt = commands.add_parser("encrypt", help="Encipher plain XML into an LX file.")
    encrypt.add_argument("input", help="Path to the deciphered LX format XML file.")
    encrypt.add_argument(
        "--output",
        default=None,
        help="Path for the LX file (default: input with {} suffix).".format(LX_SUFFIX),
    )
    encrypt.set_defaults(handler=cmd_encrypt)

    convert = commands.add_parser("convert", help="Convert a FlarmNet file to another format.")
    convert.add_argument("input", help="Path to the FlarmNet file to convert.")
    convert.add_argument(
        "--to",
        dest="target",
        required=True,
        choices=format_keys,
        help="Target format.",
    )
    convert.add_argument(
        "--from",
        dest="source",
        default=None,
        choices=format_keys,
        help="Source format (default: detected from content).",
    )
    convert.add_argument(
        "--output",
        default=None,
        help="Output path (default: {} next to the input).".format(
            " / ".join("{} for {}".format(DEFAULT_OUTPUT_NAMES[k], k) for k in format_keys)
        ),
    )
    convert.set_defaults(handler=cmd_convert)

    info = commands.add_parser("info", help="Show version, record count and record errors.")
    info.add_argument("input", help="Path to the FlarmNet file.")
    info.add_argument(
        "--from",
        dest="source",
        default=None,
        choices=format_keys,
        help="Source format (default: detected from content).",
    )
    info.set_defaults(handler=cmd_info)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m flarmnet`` and the ``flarmnet`` script.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=resolve_log_level(args.verbose), format=LOG_FORMAT)

    try:
        args.handler(args)
    except (FlarmnetError, OSError) as exc:
        print("Error: {}".format(exc), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
