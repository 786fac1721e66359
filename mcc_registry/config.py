from enum import Enum
from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

from mcc_registry.errors import ConfigurationError

DATA_DIR = Path(__file__).parent / "data"


class DescriptionSource(str, Enum):
    """Description sources, in fallback order."""

    ISO = "iso"
    USDA = "usda"
    STRIPE = "stripe"
    VISA = "visa"
    MASTERCARD = "mastercard"
    AMEX = "amex"
    ALIPAY = "alipay"
    IRS = "irs"


DESCRIPTION_SOURCES: tuple[str, ...] = tuple(source.value for source in DescriptionSource)


class Settings(BaseSettings):
    """Registry settings loaded from environment (MCC_ prefix)."""

    model_config = SettingsConfigDict(
        env_prefix="MCC_",
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    default_description_source: str = DescriptionSource.ISO.value

    # Advisory: callers decide which ranges are eligible
    include_reserved_ranges: bool = False

    # When False every query re-reads the data source
    cache_enabled: bool = True

    data_path: str = str(DATA_DIR)

    # Base URL the download job fetches the three dataset files from
    data_source_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Resolved values consumed by the registry core."""
        return {
            "default_description_source": self.default_description_source,
            "include_reserved_ranges": self.include_reserved_ranges,
            "cache_enabled": self.cache_enabled,
            "data_path": self.data_path,
        }


def validate_configuration(config: Settings) -> bool:
    """
    Check resolved settings before they are used.

    Raises:
        ConfigurationError: If data_path is blank or the default
            description source is not a recognised source id
    """
    if not str(config.data_path).strip():
        raise ConfigurationError("data_path cannot be blank")

    source = config.default_description_source
    if isinstance(source, DescriptionSource):
        source = source.value
    if source not in DESCRIPTION_SOURCES:
        raise ConfigurationError(
            f"default_description_source must be one of: {', '.join(DESCRIPTION_SOURCES)}"
        )

    return True


settings = Settings()
