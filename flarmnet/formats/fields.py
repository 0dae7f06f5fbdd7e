"""Field layout of the XCSoar fixed-width record line.

WHY: Every record line in an XCSoar FlarmNet file is the concatenation
of seven fixed-width fields. The decoder slices lines by these widths and
the encoder pads values to them, so both must agree on every offset.

HOW: FIELDS is the single ordered table of (name, length) pairs. Offsets
are derived once at import time by a cumulative sum of ``length * 2``,
because each decoded character is stored as two hex digits.

RULES:
- Lengths are in decoded characters; offsets/ranges are in hex digits
- Field names match the Record attribute they fill
- LINE_LENGTH is derived from the table, never set by hand (172)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

# Each decoded character is written as two hex digits.
HEX_DIGITS_PER_CHAR = 2


@dataclass(frozen=True)
class Field:
    """One column of the fixed-width layout.

    Attributes:
        name: Record attribute this field maps to.
        length: Width in decoded characters.
        start: Offset of the first hex digit in the line.
    """

    name: str
    length: int
    start: int

    @property
    def width(self) -> int:
        """Width in hex digits."""
        return self.length * HEX_DIGITS_PER_CHAR

    @property
    def stop(self) -> int:
        return self.start + self.width

    @property
    def slice(self) -> slice:
        return slice(self.start, self.stop)


_LAYOUT: List[Tuple[str, int]] = [
    ("flarm_id", 6),
    ("pilot_name", 21),
    ("airfield", 21),
    ("plane_type", 21),
    ("registration", 7),
    ("call_sign", 3),
    ("frequency", 7),
]


def _build_fields(layout: List[Tuple[str, int]]) -> Tuple[Field, ...]:
    fields: List[Field] = []
    offset = 0
    for name, length in layout:
        fields.append(Field(name=name, length=length, start=offset))
        offset += length * HEX_DIGITS_PER_CHAR
    return tuple(fields)


FIELDS: Tuple[Field, ...] = _build_fields(_LAYOUT)

LINE_LENGTH: int = FIELDS[-1].stop

FIELDS_BY_NAME = {f.name: f for f in FIELDS}
