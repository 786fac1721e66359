"""
Serialization of registry entities for API responses.

Each entity has a pydantic model describing its public shape. The
serialize_* helpers build the model with only the requested parts set
and dump it with exclude_unset, so switched-off options drop their keys
entirely rather than appearing as null.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field

from mcc_registry.models.category import Category
from mcc_registry.models.code import Code
from mcc_registry.models.range import Range
from mcc_registry.services.collection import Collection


class CodeSummary(BaseModel):
    """Public representation of a Code."""

    mcc: str = Field(..., description="4-digit merchant category code")
    description: str | None = Field(
        default=None,
        description="Description from the configured default source, with fallback",
    )
    stripe_code: str | None = Field(default=None, description="Stripe snake_case identifier")
    irs_reportable: bool = Field(default=False, description="Reportable under IRS 6050W")

    iso_description: str | None = None
    usda_description: str | None = None
    stripe_description: str | None = None
    visa_description: str | None = None
    visa_clearing_name: str | None = None
    mastercard_description: str | None = None
    amex_description: str | None = None
    alipay_description: str | None = None
    irs_description: str | None = None

    categories: list[str] | None = Field(
        default=None,
        description="Ids of risk categories containing this code",
    )
    range: str | None = Field(default=None, description="Name of the containing ISO range")


class RangeSummary(BaseModel):
    """Public representation of a Range."""

    start_code: str
    end_code: str
    name: str
    description: str
    reserved: bool


class CategorySummary(BaseModel):
    """Public representation of a Category."""

    id: str
    name: str
    description: str
    codes: list[str] | None = None


ALL_DESCRIPTION_KEYS: tuple[str, ...] = (
    "iso_description",
    "usda_description",
    "stripe_description",
    "visa_description",
    "visa_clearing_name",
    "mastercard_description",
    "amex_description",
    "alipay_description",
    "irs_description",
)


def _resolve(collection: Collection | None) -> Collection:
    if collection is not None:
        return collection
    from mcc_registry.registry import get_collection

    return get_collection()


def serialize_code(
    code: Code,
    *,
    include_all_descriptions: bool = False,
    include_categories: bool = True,
    include_range: bool = True,
    collection: Collection | None = None,
) -> dict[str, Any]:
    """
    Serialize a Code.

    Args:
        code: The code to serialize
        include_all_descriptions: Add every per-source description
        include_categories: Add the ids of containing categories
        include_range: Add the containing range name
        collection: Collection used for categories, range and default source

    Returns:
        JSON-compatible dict
    """
    collection = _resolve(collection)
    fields: dict[str, Any] = {
        "mcc": code.mcc,
        "description": code.description(settings=collection.settings),
        "stripe_code": code.stripe_code,
        "irs_reportable": code.is_irs_reportable(),
    }
    if include_all_descriptions:
        fields.update({key: getattr(code, key) for key in ALL_DESCRIPTION_KEYS})
    if include_categories:
        fields["categories"] = [c.id for c in collection.categories_for(code)]
    if include_range:
        containing = collection.range_for(code)
        fields["range"] = containing.name if containing else None

    return CodeSummary(**fields).model_dump(exclude_unset=True)


def serialize_codes(
    codes: Iterable[Code],
    *,
    include_all_descriptions: bool = False,
    include_categories: bool = True,
    include_range: bool = True,
    collection: Collection | None = None,
) -> list[dict[str, Any]]:
    """Serialize several codes with the same options."""
    collection = _resolve(collection)
    return [
        serialize_code(
            code,
            include_all_descriptions=include_all_descriptions,
            include_categories=include_categories,
            include_range=include_range,
            collection=collection,
        )
        for code in codes
    ]


def serialize_range(mcc_range: Range) -> dict[str, Any]:
    return RangeSummary(**mcc_range.to_record()).model_dump()


def serialize_category(category: Category, *, include_codes: bool = False) -> dict[str, Any]:
    """Serialize a Category; entries are only listed with include_codes."""
    fields: dict[str, Any] = {
        "id": category.id,
        "name": category.name,
        "description": category.description,
    }
    if include_codes:
        fields["codes"] = list(category.codes)
    return CategorySummary(**fields).model_dump(exclude_unset=True)
