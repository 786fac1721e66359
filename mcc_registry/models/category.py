"""
Risk Category Model.

A Category is a named, arbitrary set of MCC values used for risk or
business-policy classification. Unlike a Range it need not be
contiguous: entries are single codes ("7995") or textual ranges
("3000-3350"), mixed freely.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from mcc_registry.models.mcc_value import pad_code, try_normalize_code

RANGE_SEPARATOR = "-"


def normalize_category_id(value: object) -> str:
    """Symbolic form of a category id: trimmed and lower-cased."""
    if isinstance(value, Category):
        return value.id
    return str(value).strip().lower()


def _normalize_entry(entry: object) -> str:
    if isinstance(entry, int) and not isinstance(entry, bool):
        return f"{entry:04d}"
    return str(entry).strip()


@dataclass(frozen=True, slots=True, eq=False)
class Category:
    """
    A named set of codes and code ranges.

    Attributes:
        id: Normalized identifier (e.g., "gambling")
        name: Human-readable name
        description: What the category covers
        codes: Entries in stored order, each "NNNN" or "NNNN-NNNN"
    """

    id: str
    name: str = ""
    description: str = ""
    codes: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", normalize_category_id(self.id))
        object.__setattr__(self, "name", "" if self.name is None else str(self.name))
        object.__setattr__(
            self, "description", "" if self.description is None else str(self.description)
        )
        entries: Iterable[object] = () if self.codes is None else self.codes
        if isinstance(entries, (str, int)):
            entries = (entries,)
        object.__setattr__(self, "codes", tuple(_normalize_entry(e) for e in entries))

    @classmethod
    def from_record(cls, category_id: str, record: Mapping[str, Any]) -> "Category":
        """Build a Category from an id and its {name, description, codes} record."""
        return cls(
            id=category_id,
            name=record.get("name", ""),
            description=record.get("description", ""),
            codes=record.get("codes") or (),
        )

    def includes(self, value: object) -> bool:
        """
        Check whether a code belongs to this category.

        Single entries match exactly after zero-padding; range entries
        match when the code lies between their padded endpoints.
        Malformed values are never included.
        """
        normalized = try_normalize_code(value)
        if normalized is None:
            return False

        for entry in self.codes:
            if RANGE_SEPARATOR in entry:
                start, _, end = entry.partition(RANGE_SEPARATOR)
                if pad_code(start) <= normalized <= pad_code(end):
                    return True
            elif pad_code(entry) == normalized:
                return True
        return False

    def __contains__(self, value: object) -> bool:
        return self.includes(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Category):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Category(id={self.id!r}, name={self.name!r}, codes_count={len(self.codes)})"

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "codes": list(self.codes),
        }
