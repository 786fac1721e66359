"""
pydantic field adapter for MCC values.

Wraps Validator as an annotated field type so models can declare

    class Transaction(BaseModel):
        mcc: mcc_field(deny_categories=["gambling", "adult"])

Validation failures surface as a regular pydantic ValidationError.
"""

from collections.abc import Iterable
from typing import Annotated, Any

from pydantic import AfterValidator

from mcc_registry.services.collection import Collection
from mcc_registry.services.validator import Validator


def mcc_field(
    *,
    strict: bool = True,
    deny_categories: Iterable[object] = (),
    allow_categories: Iterable[object] | None = None,
    allow_blank: bool = False,
    message: str | None = None,
    collection: Collection | None = None,
) -> Any:
    """
    Build an annotated type validating an MCC field.

    Args:
        strict: Require the code to exist in the collection
        deny_categories: Category ids whose codes are rejected
        allow_categories: If set, only codes in these categories pass
        allow_blank: Accept None and blank strings without checking
        message: Replace the validator's messages with this one
        collection: Collection to check against (process default if None)

    Returns:
        ``Annotated[str | int | None, AfterValidator(...)]``
    """
    validator = Validator(
        strict=strict,
        deny_categories=deny_categories,
        allow_categories=allow_categories,
        collection=collection,
    )

    def check(value: str | int | None) -> str | int | None:
        if allow_blank and (value is None or (isinstance(value, str) and not value.strip())):
            return value
        errors = validator.validate(value)
        if errors:
            raise ValueError(message or "; ".join(errors))
        return value

    return Annotated[str | int | None, AfterValidator(check)]
