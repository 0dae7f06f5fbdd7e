"""FlarmNet file converter: one registry, two device encodings.

WHY: FlarmNet publishes its registry of FLARM radio ids, pilots and
aircraft in two incompatible file layouts. XCSoar, WinPilot, LK8000 and
ClearNav read a hex-encoded fixed-width text file, while LXNav/Naviter
devices read an XML document scrambled by a byte-shift cipher. This
package decodes either layout into one in-memory model and encodes that
model back into either layout.

HOW: Two layers. ``flarmnet.core`` holds the value types and the error
hierarchy. ``flarmnet.formats`` holds the codecs (``xcsoar`` and ``lx``),
the shared field table and cipher, and a registry so callers can pick a
codec by name. The CLI in ``flarmnet.cli`` is the only code that touches
the file system.

RULES:
- Both codecs consume and produce the same File/Record types
- Decoding isolates per-record failures; file-level failures raise
- Codecs never open files; callers pass bytes, text or streams
"""

from flarmnet.core.models import DecodedFile, File, Record, RecordResult

__version__ = "0.1.0"

__all__ = [
    "DecodedFile",
    "File",
    "Record",
    "RecordResult",
    "__version__",
]
