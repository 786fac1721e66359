"""
MCC Validator — Rule Evaluation for Data-Entry Pipelines.

Validates candidate MCC values before they are stored. Returns a list of
user-facing messages; an empty list means the value is acceptable.

RULES (evaluated in order, first failure wins):
1. Format: 1-4 digits after trimming            -> invalid_format
2. Non-strict validators stop here
3. Existence: value names a loaded code          -> not_found
4. Deny-list: code in any denied category        -> denied_category
5. Allow-list: code in none of the allowed ones  -> denied_category

None is always valid: format and existence are not checked for it.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from mcc_registry.models.category import normalize_category_id
from mcc_registry.services.collection import Collection

MESSAGES: dict[str, str] = {
    "invalid_format": "must be a valid 4-digit MCC code",
    "not_found": "is not a recognized MCC code",
    "denied_category": "is in a denied category",
}

# Softer than the Code invariant: raw candidates may omit leading zeros
CANDIDATE_PATTERN = re.compile(r"[0-9]{1,4}")


def _ids(categories: Iterable[object] | None) -> tuple[str, ...] | None:
    if categories is None:
        return None
    if isinstance(categories, str):
        categories = (categories,)
    return tuple(normalize_category_id(c) for c in categories)


def has_valid_format(value: object) -> bool:
    """True if the value, as trimmed text, is 1 to 4 ASCII digits."""
    if value is None or isinstance(value, bool):
        return False
    return CANDIDATE_PATTERN.fullmatch(str(value).strip()) is not None


@dataclass(frozen=True)
class Validator:
    """
    Stateless MCC validator.

    Attributes:
        strict: Require the code to exist in the collection
        deny_categories: Category ids whose codes are rejected
        allow_categories: If set, only codes in these categories pass
        collection: Collection to check against (process default if None)

    Examples:
        >>> Validator().is_valid("5411")
        True
        >>> Validator(deny_categories=("gambling",)).validate("7995")
        ['is in a denied category']
    """

    strict: bool = True
    deny_categories: tuple[str, ...] = ()
    allow_categories: tuple[str, ...] | None = None
    collection: Collection | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "deny_categories", _ids(self.deny_categories) or ())
        object.__setattr__(self, "allow_categories", _ids(self.allow_categories))

    def _collection(self) -> Collection:
        if self.collection is not None:
            return self.collection
        from mcc_registry.registry import get_collection

        return get_collection()

    def validate(self, value: object) -> list[str]:
        """
        Validate a candidate value.

        Args:
            value: Candidate MCC as text, integer, or None

        Returns:
            Error messages; empty if the value is valid
        """
        if value is None:
            return []

        if not has_valid_format(value):
            return [MESSAGES["invalid_format"]]

        if not self.strict:
            return []

        collection = self._collection()
        code = collection.find(value)
        if code is None:
            return [MESSAGES["not_found"]]

        if any(collection.code_in_category(code, c) for c in self.deny_categories):
            return [MESSAGES["denied_category"]]

        if self.allow_categories is not None and not any(
            collection.code_in_category(code, c) for c in self.allow_categories
        ):
            return [MESSAGES["denied_category"]]

        return []

    def is_valid(self, value: object) -> bool:
        return not self.validate(value)


def validate(
    value: object,
    *,
    strict: bool = True,
    deny_categories: Iterable[object] = (),
    allow_categories: Iterable[object] | None = None,
    collection: Collection | None = None,
) -> list[str]:
    """Validate a value with one-off options. See Validator."""
    return Validator(
        strict=strict,
        deny_categories=_ids(deny_categories) or (),
        allow_categories=_ids(allow_categories),
        collection=collection,
    ).validate(value)


def is_valid(
    value: object,
    *,
    strict: bool = True,
    deny_categories: Iterable[object] = (),
    allow_categories: Iterable[object] | None = None,
    collection: Collection | None = None,
) -> bool:
    """True if validate() returns no messages."""
    return not validate(
        value,
        strict=strict,
        deny_categories=deny_categories,
        allow_categories=allow_categories,
        collection=collection,
    )
