"""
MCC Code Model.

A Code is one Merchant Category Code together with the descriptions
published for it by each authoritative source.

INVARIANTS:
- ``mcc`` is always a 4-digit string; construction fails otherwise
- Text fields are either a non-empty trimmed string or None, never ""
- Identity is ``mcc`` alone: Code("5411") == "5411" == 5411
- Codes hold no references to ranges or categories; membership is
  computed on demand against a Collection
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from mcc_registry.config import DescriptionSource, Settings
from mcc_registry.models.mcc_value import normalize_code, try_normalize_code

if TYPE_CHECKING:
    from mcc_registry.models.category import Category
    from mcc_registry.models.range import Range
    from mcc_registry.services.collection import Collection

# Source id -> field, in fallback order
DESCRIPTION_FIELDS: dict[str, str] = {
    DescriptionSource.ISO.value: "iso_description",
    DescriptionSource.USDA.value: "usda_description",
    DescriptionSource.STRIPE.value: "stripe_description",
    DescriptionSource.VISA.value: "visa_description",
    DescriptionSource.MASTERCARD.value: "mastercard_description",
    DescriptionSource.AMEX.value: "amex_description",
    DescriptionSource.ALIPAY.value: "alipay_description",
    DescriptionSource.IRS.value: "irs_description",
}

TEXT_FIELDS: tuple[str, ...] = (
    "iso_description",
    "usda_description",
    "stripe_description",
    "stripe_code",
    "visa_description",
    "visa_clearing_name",
    "mastercard_description",
    "amex_description",
    "alipay_description",
    "irs_description",
)

RECORD_FIELDS: tuple[str, ...] = ("mcc", *TEXT_FIELDS, "irs_reportable")


def _presence(value: Any) -> str | None:
    """Blank values become None; everything else is trimmed text."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve(collection: "Collection | None") -> "Collection":
    if collection is not None:
        return collection
    from mcc_registry.registry import get_collection

    return get_collection()


def _default_settings() -> Settings:
    from mcc_registry.registry import get_settings

    return get_settings()


@dataclass(frozen=True, slots=True, eq=False)
class Code:
    """
    A single Merchant Category Code.

    Attributes:
        mcc: The 4-digit code, zero-padded (e.g., "0742")
        iso_description: Official ISO 18245 description
        usda_description: USDA description
        stripe_description: Stripe API description
        stripe_code: Stripe's snake_case identifier (e.g., "grocery_stores_supermarkets")
        visa_description: Visa description
        visa_clearing_name: Visa's abbreviated clearing name
        mastercard_description: Mastercard description
        amex_description: American Express description
        alipay_description: Alipay description
        irs_description: IRS description used for tax reporting
        irs_reportable: Reportable under IRS 6050W (True / False / unknown)
    """

    mcc: str
    iso_description: str | None = None
    usda_description: str | None = None
    stripe_description: str | None = None
    stripe_code: str | None = None
    visa_description: str | None = None
    visa_clearing_name: str | None = None
    mastercard_description: str | None = None
    amex_description: str | None = None
    alipay_description: str | None = None
    irs_description: str | None = None
    irs_reportable: bool | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "mcc", normalize_code(self.mcc))
        for name in TEXT_FIELDS:
            object.__setattr__(self, name, _presence(getattr(self, name)))
        if self.irs_reportable is not None and not isinstance(self.irs_reportable, bool):
            raise TypeError(f"irs_reportable must be a bool or None, got {self.irs_reportable!r}")

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Code":
        """Build a Code from a source record. Unknown keys are ignored."""
        return cls(**{name: record.get(name) for name in RECORD_FIELDS})

    # -------------------------------------------------------------------------
    # Descriptions and flags
    # -------------------------------------------------------------------------

    def description(
        self,
        source: DescriptionSource | str | None = None,
        *,
        settings: Settings | None = None,
    ) -> str | None:
        """
        Resolve a human-readable description.

        The requested source (or the configured default) is tried first.
        If it is blank, every source is tried in declared order and the
        first present description wins.

        Args:
            source: Source id to prefer (e.g., "iso", "stripe")
            settings: Settings providing the default source

        Returns:
            The description, or None if no source has one
        """
        if source is None:
            source = (settings or _default_settings()).default_description_source
        key = source.value if isinstance(source, DescriptionSource) else str(source)

        preferred = DESCRIPTION_FIELDS.get(key)
        if preferred:
            result = getattr(self, preferred)
            if result:
                return result

        for field_name in DESCRIPTION_FIELDS.values():
            result = getattr(self, field_name)
            if result:
                return result

        return None

    def is_irs_reportable(self) -> bool:
        """True only when the flag is explicitly True."""
        return self.irs_reportable is True

    # -------------------------------------------------------------------------
    # Membership (computed against a Collection)
    # -------------------------------------------------------------------------

    def range(self, collection: "Collection | None" = None) -> "Range | None":
        """The ISO 18245 range containing this code."""
        return _resolve(collection).range_for(self)

    def categories(self, collection: "Collection | None" = None) -> tuple["Category", ...]:
        """All categories containing this code."""
        return _resolve(collection).categories_for(self)

    def in_category(
        self,
        category: "Category | str",
        collection: "Collection | None" = None,
    ) -> bool:
        """Check membership in a category given as a Category or an id."""
        return _resolve(collection).code_in_category(self, category)

    # -------------------------------------------------------------------------
    # Identity and conversion
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Code):
            return self.mcc == other.mcc
        if isinstance(other, (str, int)) and not isinstance(other, bool):
            return self.mcc == try_normalize_code(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.mcc)

    def __int__(self) -> int:
        return int(self.mcc)

    def __str__(self) -> str:
        return self.mcc

    def __repr__(self) -> str:
        return f"Code(mcc={self.mcc!r}, description={self.description()!r})"

    def to_record(self) -> dict[str, Any]:
        """All stored fields, absent ones as None."""
        return {name: getattr(self, name) for name in RECORD_FIELDS}

    def to_public_view(self, collection: "Collection | None" = None) -> dict[str, Any]:
        """
        Record plus computed fields for API responses.

        Adds ``description`` (default source), ``categories`` (ids) and
        ``range`` (containing range name, or None).
        """
        collection = _resolve(collection)
        containing = collection.range_for(self)
        return {
            **self.to_record(),
            "description": self.description(settings=collection.settings),
            "categories": [c.id for c in collection.categories_for(self)],
            "range": containing.name if containing else None,
        }
