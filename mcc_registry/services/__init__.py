"""
MCC registry services.

Dataset loading, querying, validation and serialization.
"""

from mcc_registry.services.collection import (
    FILTER_KEYS,
    Collection,
    DatasetSnapshot,
    build_snapshot,
)
from mcc_registry.services.data_loader import DatasetLoader, DatasetRecords, load_dataset
from mcc_registry.services.field_validator import mcc_field
from mcc_registry.services.serializer import (
    CategorySummary,
    CodeSummary,
    RangeSummary,
    serialize_category,
    serialize_code,
    serialize_codes,
    serialize_range,
)
from mcc_registry.services.validator import MESSAGES, Validator, is_valid, validate

__all__ = [
    "CategorySummary",
    "CodeSummary",
    "Collection",
    "DatasetLoader",
    "DatasetRecords",
    "DatasetSnapshot",
    "FILTER_KEYS",
    "MESSAGES",
    "RangeSummary",
    "Validator",
    "build_snapshot",
    "is_valid",
    "load_dataset",
    "mcc_field",
    "serialize_category",
    "serialize_code",
    "serialize_codes",
    "serialize_range",
    "validate",
]
