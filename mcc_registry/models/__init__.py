from mcc_registry.models.category import Category, normalize_category_id
from mcc_registry.models.code import DESCRIPTION_FIELDS, RECORD_FIELDS, TEXT_FIELDS, Code
from mcc_registry.models.mcc_value import (
    CodeLike,
    HasMcc,
    normalize_code,
    try_normalize_code,
)
from mcc_registry.models.range import Range

__all__ = [
    "Category",
    "Code",
    "CodeLike",
    "DESCRIPTION_FIELDS",
    "HasMcc",
    "RECORD_FIELDS",
    "Range",
    "TEXT_FIELDS",
    "normalize_category_id",
    "normalize_code",
    "try_normalize_code",
]
