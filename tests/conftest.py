import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from mcc_registry import registry
from mcc_registry.config import Settings
from mcc_registry.services.collection import Collection

SAMPLE_CODES: list[dict[str, Any]] = [
    {
        "mcc": "0742",
        "iso_description": "Veterinary Services",
        "stripe_description": "Veterinary Services",
        "stripe_code": "veterinary_services",
        "irs_description": "Veterinary Services",
        "irs_reportable": True,
    },
    {
        "mcc": "3000",
        "iso_description": "United Airlines",
        "visa_clearing_name": "UNITED",
        "irs_reportable": True,
    },
    {
        "mcc": "4829",
        "iso_description": "Wire Transfers and Money Orders",
        "stripe_code": "wires_money_orders",
        "irs_reportable": False,
    },
    {
        "mcc": "5411",
        "iso_description": "Grocery Stores, Supermarkets",
        "usda_description": "Grocery Stores, Supermarkets",
        "stripe_description": "Grocery Stores, Supermarkets",
        "stripe_code": "grocery_stores_supermarkets",
        "visa_description": "Grocery Stores and Supermarkets",
        "irs_reportable": True,
    },
    {
        "mcc": "5499",
        "iso_description": "Miscellaneous Food Stores",
        "stripe_code": "miscellaneous_food_stores",
        "irs_reportable": True,
    },
    {
        "mcc": "7995",
        "iso_description": "Betting, including Lottery Tickets",
        "stripe_description": "Betting/Casino Gambling",
        "stripe_code": "betting_casino_gambling",
        "irs_reportable": True,
    },
    {
        "mcc": "9406",
        "iso_description": "",
        "visa_description": "Government-Owned Lotteries (Non-U.S. region)",
    },
]

SAMPLE_RANGES: list[dict[str, Any]] = [
    {"start": "0000", "end": "0699", "name": "Reserved for ISO Use", "reserved": True},
    {"start": "0700", "end": "0999", "name": "Agricultural Services"},
    {"start": "3000", "end": "3299", "name": "Airlines"},
    {"start": "4800", "end": "4999", "name": "Utility Services"},
    {"start": "5000", "end": "5599", "name": "Retail Outlet Services"},
    {"start": "7300", "end": "7999", "name": "Business Services"},
    {"start": "9000", "end": "9999", "name": "Government Services"},
]

SAMPLE_CATEGORIES: dict[str, dict[str, Any]] = {
    "gambling": {
        "name": "Gambling",
        "description": "Betting and lotteries",
        "codes": ["7995", "9406"],
    },
    "airlines": {
        "name": "Airlines",
        "description": "Air carriers",
        "codes": ["3000-3350", "4511"],
    },
    "money_transfer": {
        "name": "Money Transfer",
        "description": "Wires and money orders",
        "codes": ["4829"],
    },
}


def write_dataset(
    directory: Path,
    codes: list[dict[str, Any]] | None = None,
    ranges: list[dict[str, Any]] | None = None,
    categories: dict[str, dict[str, Any]] | None = None,
) -> Path:
    """Write the three dataset files into directory."""
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "mcc_codes.json").write_text(
        json.dumps(SAMPLE_CODES if codes is None else codes), encoding="utf-8"
    )
    (directory / "ranges.json").write_text(
        json.dumps(SAMPLE_RANGES if ranges is None else ranges), encoding="utf-8"
    )
    (directory / "risk_categories.json").write_text(
        json.dumps(SAMPLE_CATEGORIES if categories is None else categories), encoding="utf-8"
    )
    return directory


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Directory holding the small sample dataset."""
    return write_dataset(tmp_path / "data")


@pytest.fixture
def settings(data_dir: Path) -> Settings:
    return Settings(data_path=str(data_dir))


@pytest.fixture
def collection(settings: Settings) -> Collection:
    """Collection over the sample dataset."""
    return Collection(settings=settings)


@pytest.fixture(autouse=True)
def reset_registry() -> Iterator[None]:
    """Keep the process-wide registry isolated between tests."""
    registry.reset()
    yield
    registry.reset()


@pytest.fixture
def configured_registry(data_dir: Path) -> Collection:
    """Point the process-wide registry at the sample dataset."""
    registry.configure(data_path=str(data_dir))
    return registry.get_collection()


@pytest.fixture
def dataset_writer():
    """The write_dataset helper, for tests that need a custom dataset."""
    return write_dataset
