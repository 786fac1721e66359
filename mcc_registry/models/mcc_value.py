"""
MCC value normalization.

Every public operation accepts an MCC as text, an integer, or an
object carrying an ``mcc`` attribute (a Code). This module is the single
place those inputs are turned into the canonical form: a 4-character,
zero-padded digit string.

INVARIANTS:
- normalize_code(normalize_code(x)) == normalize_code(x)
- A normalized code always matches ^\\d{4}$
- Fixed width means lexicographic and numeric order agree
"""

import re
from typing import Protocol, TypeAlias, runtime_checkable

from mcc_registry.errors import InvalidFormat

CODE_PATTERN = re.compile(r"[0-9]{4}")
CODE_WIDTH = 4


@runtime_checkable
class HasMcc(Protocol):
    """Anything exposing a normalized ``mcc`` string (e.g. Code)."""

    @property
    def mcc(self) -> str: ...


CodeLike: TypeAlias = str | int | HasMcc


def _as_text(value: object) -> str:
    if isinstance(value, bool):
        raise InvalidFormat(value)
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, HasMcc):
        return str(value.mcc)
    if value is None:
        return ""
    raise InvalidFormat(value)


def pad_code(value: str) -> str:
    """Strip whitespace and left-pad with zeros. No validation."""
    return value.strip().rjust(CODE_WIDTH, "0")


def normalize_code(value: object) -> str:
    """
    Normalize a code-like value to a 4-digit string.

    Fewer than four digits are zero-padded; None and the empty string
    become "0000".

    Args:
        value: Text, integer, or object with an ``mcc`` attribute

    Returns:
        The canonical 4-digit code string

    Raises:
        InvalidFormat: If the value has non-digits or more than 4 digits
    """
    normalized = pad_code(_as_text(value))
    if not CODE_PATTERN.fullmatch(normalized):
        raise InvalidFormat(value)
    return normalized


def try_normalize_code(value: object) -> str | None:
    """Like normalize_code, but returns None for malformed input."""
    try:
        return normalize_code(value)
    except InvalidFormat:
        return None
