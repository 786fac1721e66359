"""
ISO 18245 Range Model.

A Range is a closed interval [start_code, end_code] of the 4-digit code
space naming an industry segment (e.g. 3000-3299 "Airlines").

INVARIANTS:
- Both endpoints are normalized 4-digit strings
- start_code <= end_code, construction fails otherwise
- Identity is the (start_code, end_code) pair; name is not part of it
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from mcc_registry.errors import InvalidRange
from mcc_registry.models.mcc_value import normalize_code, try_normalize_code


@dataclass(frozen=True, slots=True, eq=False)
class Range:
    """
    A contiguous block of MCC values.

    Attributes:
        start_code: First code in the range (inclusive)
        end_code: Last code in the range (inclusive)
        name: Segment name (e.g., "Airlines")
        description: Longer description of the segment
        reserved: True for blocks reserved by ISO
    """

    start_code: str
    end_code: str
    name: str = ""
    description: str = ""
    reserved: bool = False

    def __post_init__(self) -> None:
        start = normalize_code(self.start_code)
        end = normalize_code(self.end_code)
        if start > end:
            raise InvalidRange(start, end)

        object.__setattr__(self, "start_code", start)
        object.__setattr__(self, "end_code", end)
        object.__setattr__(self, "name", "" if self.name is None else str(self.name))
        object.__setattr__(
            self, "description", "" if self.description is None else str(self.description)
        )
        object.__setattr__(self, "reserved", self.reserved is True)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Range":
        """Build a Range from a record keyed start/end or start_code/end_code."""
        start = record.get("start", record.get("start_code"))
        end = record.get("end", record.get("end_code"))
        return cls(
            start_code=start,
            end_code=end,
            name=record.get("name", ""),
            description=record.get("description", ""),
            reserved=record.get("reserved", False),
        )

    @property
    def is_reserved(self) -> bool:
        return self.reserved

    def includes(self, value: object) -> bool:
        """
        Check whether a code falls within this range.

        Accepts text, integers, or Codes. Malformed values are never
        included.
        """
        normalized = try_normalize_code(value)
        if normalized is None:
            return False
        return self.start_code <= normalized <= self.end_code

    def __contains__(self, value: object) -> bool:
        return self.includes(value)

    def size(self) -> int:
        """Number of codes in the range, inclusive."""
        return int(self.end_code) - int(self.start_code) + 1

    def __len__(self) -> int:
        return self.size()

    def codes(self) -> list[str]:
        """Every code in the range as a 4-digit string. Fresh list per call."""
        return [f"{n:04d}" for n in range(int(self.start_code), int(self.end_code) + 1)]

    def __iter__(self) -> Iterator[str]:
        return iter(self.codes())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return (self.start_code, self.end_code) == (other.start_code, other.end_code)

    def __hash__(self) -> int:
        return hash((self.start_code, self.end_code))

    def __str__(self) -> str:
        return f"{self.start_code}-{self.end_code}"

    def __repr__(self) -> str:
        return (
            f"Range({self.start_code}..{self.end_code}, name={self.name!r}, "
            f"reserved={self.reserved})"
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "start_code": self.start_code,
            "end_code": self.end_code,
            "name": self.name,
            "description": self.description,
            "reserved": self.reserved,
        }
