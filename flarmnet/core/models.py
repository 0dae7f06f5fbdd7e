"""Value types for FlarmNet registry files.

WHY: The XCSoar and LX formats store the same information in very
different shapes. Every codec decodes into, and encodes from, these
types, so converting between formats is just decode with one codec and
encode with the other.

HOW: Four frozen dataclasses:
  Record       - one registry entry (seven text fields)
  File         - a version number plus an ordered tuple of Records
  RecordResult - the outcome of decoding one candidate record
  DecodedFile  - a version plus one RecordResult per candidate record

RULES:
- Record and File are immutable; equality is structural
- Record order inside a File is significant and preserved
- flarm_id must be a hexadecimal numeral; other fields are free text
- A RecordResult holds exactly one of ``record`` or ``error``
- DecodedFile keeps failures next to successes, in input order
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from flarmnet.core.errors import RecordError
from flarmnet.core.hexnum import U32_MAX, is_hex


@dataclass(frozen=True)
class Record:
    """A single FlarmNet registry entry.

    RULES:
    - flarm_id: the FLARM radio id as a hex numeral, e.g. "3EE3C7"
    - pilot_name, airfield, plane_type, registration, call_sign,
      frequency: free-form text, empty string when unknown
    """

    flarm_id: str
    pilot_name: str = ""
    airfield: str = ""
    plane_type: str = ""
    registration: str = ""
    call_sign: str = ""
    frequency: str = ""

    def __post_init__(self) -> None:
        if not is_hex(self.flarm_id):
            raise ValueError(f"flarm_id must be a hexadecimal numeral, got {self.flarm_id!r}")


@dataclass(frozen=True)
class File:
    """A FlarmNet registry: version number and records.

    ``records`` may be passed as any iterable; it is stored as a tuple.
    """

    version: int
    records: Tuple[Record, ...] = ()

    def __post_init__(self) -> None:
        if not 0 <= self.version <= U32_MAX:
            raise ValueError(f"version must fit in 32 unsigned bits, got {self.version}")
        object.__setattr__(self, "records", tuple(self.records))


@dataclass(frozen=True)
class RecordResult:
    """Outcome of decoding one candidate record.

    WHY: One corrupt line or element must not discard the rest of a
    file. Decoders return one of these per candidate so callers can keep
    the good records and report the bad ones.

    RULES:
    - Success: ``record`` set, ``error`` None
    - Failure: ``error`` set, ``record`` None
    - Build with ``success()`` / ``failure()``
    """

    record: Optional[Record] = None
    error: Optional[RecordError] = None

    def __post_init__(self) -> None:
        if (self.record is None) == (self.error is None):
            raise ValueError("RecordResult needs exactly one of record or error")

    @classmethod
    def success(cls, record: Record) -> RecordResult:
        return cls(record=record)

    @classmethod
    def failure(cls, error: RecordError) -> RecordResult:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.record is not None

    def unwrap(self) -> Record:
        """Return the record, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.record


@dataclass(frozen=True)
class DecodedFile:
    """Result of decoding a whole file.

    Holds the file version and one RecordResult per candidate record,
    in the order the candidates appeared in the input.
    """

    version: int
    results: Tuple[RecordResult, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "results", tuple(self.results))

    @property
    def records(self) -> Tuple[Record, ...]:
        """Successfully decoded records, in input order."""
        return tuple(r.record for r in self.results if r.record is not None)

    @property
    def errors(self) -> Tuple[RecordError, ...]:
        """Record-level errors, in input order."""
        return tuple(r.error for r in self.results if r.error is not None)

    def to_file(self) -> File:
        """Build a File from the successful records, dropping failures."""
        return File(version=self.version, records=self.records)

