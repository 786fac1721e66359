"""
Process-wide MCC registry.

Holds the default Settings and a lazily created Collection for
applications that want a single shared dataset handle. Library code
should prefer passing an explicit Collection around; this module is the
entry-point convenience.
"""

import logging
from threading import Lock
from typing import Any

from pydantic import ValidationError

from mcc_registry.config import Settings, validate_configuration
from mcc_registry.config import settings as default_settings
from mcc_registry.errors import ConfigurationError
from mcc_registry.models.category import Category
from mcc_registry.models.code import Code
from mcc_registry.models.range import Range
from mcc_registry.services.collection import Collection

logger = logging.getLogger(__name__)

_lock = Lock()
_settings: Settings = default_settings
_collection: Collection | None = None


def get_settings() -> Settings:
    """Settings currently installed for the process."""
    return _settings


def get_collection() -> Collection:
    """The shared Collection, created on first use."""
    global _collection
    collection = _collection
    if collection is not None:
        return collection
    with _lock:
        if _collection is None:
            _collection = Collection(settings=_settings)
        return _collection


def configure(**overrides: Any) -> Settings:
    """
    Install new settings and drop the shared Collection.

    Unspecified fields keep their current values.

    Raises:
        ConfigurationError: If the resulting settings are invalid
    """
    global _settings, _collection
    unknown = sorted(set(overrides) - set(Settings.model_fields))
    if unknown:
        raise ConfigurationError(f"Unknown settings: {', '.join(unknown)}")
    try:
        new_settings = Settings(**{**_settings.model_dump(), **overrides})
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e
    validate_configuration(new_settings)
    with _lock:
        _settings = new_settings
        _collection = None
    logger.info("MCC_REGISTRY_CONFIGURED", extra=new_settings.to_dict())
    return new_settings


def reset() -> Settings:
    """Restore default settings and drop the shared Collection."""
    global _settings, _collection
    with _lock:
        _settings = Settings()
        _collection = None
    return _settings


# =============================================================================
# DELEGATES
# =============================================================================


def all_codes() -> tuple[Code, ...]:
    return get_collection().all()


def find(value: object) -> Code | None:
    return get_collection().find(value)


def find_or_fail(value: object) -> Code:
    return get_collection().find_or_fail(value)


def where(conditions: dict[str, Any] | None = None, **kwargs: Any) -> tuple[Code, ...]:
    return get_collection().where(conditions, **kwargs)


def in_range(name: object) -> tuple[Code, ...]:
    return get_collection().in_range(name)


def search(query: str | None) -> tuple[Code, ...]:
    return get_collection().search(query)


def in_category(category: object) -> tuple[Code, ...]:
    return get_collection().in_category(category)


def is_valid(value: object) -> bool:
    return get_collection().is_valid(value)


def count() -> int:
    return get_collection().count()


def reload() -> Collection:
    return get_collection().reload()


def ranges() -> tuple[Range, ...]:
    return get_collection().ranges()


def categories() -> tuple[Category, ...]:
    return get_collection().categories()
