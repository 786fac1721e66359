"""
MCC dataset loader.

Reads the three dataset files from a directory and hands the raw
records to Collection. Parsing stops at plain dicts and lists; turning
records into Code / Range / Category objects is Collection's job.

Files:
- mcc_codes.json: list of code records
- ranges.json: list of range records
- risk_categories.json: mapping of category id -> {name, description, codes}
"""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mcc_registry.errors import DataLoadError

logger = logging.getLogger(__name__)

CODES_FILE = "mcc_codes.json"
RANGES_FILE = "ranges.json"
CATEGORIES_FILE = "risk_categories.json"

DATASET_FILES: tuple[str, ...] = (CODES_FILE, RANGES_FILE, CATEGORIES_FILE)


@dataclass(frozen=True)
class DatasetRecords:
    """Raw records for one load pass, with the source of each set."""

    codes: list[dict[str, Any]] = field(default_factory=list)
    ranges: list[dict[str, Any]] = field(default_factory=list)
    categories: dict[str, dict[str, Any]] = field(default_factory=dict)

    codes_source: str = "<codes>"
    ranges_source: str = "<ranges>"
    categories_source: str = "<categories>"


DatasetLoader = Callable[[str], DatasetRecords]


def read_json_file(path: Path, expected: type) -> Any:
    """
    Read one dataset file and check its top-level shape.

    Raises:
        DataLoadError: If the file is missing, unparsable, or the wrong shape
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise DataLoadError(str(path), e) from e

    if not isinstance(data, expected):
        raise DataLoadError(
            str(path),
            TypeError(f"expected a JSON {expected.__name__}, got {type(data).__name__}"),
        )
    return data


def load_dataset(data_path: str | Path) -> DatasetRecords:
    """
    Load the dataset files from a directory.

    Args:
        data_path: Directory containing the three dataset files

    Returns:
        DatasetRecords with file paths as source identifiers

    Raises:
        DataLoadError: If any file cannot be read
    """
    directory = Path(data_path)
    codes_path = directory / CODES_FILE
    ranges_path = directory / RANGES_FILE
    categories_path = directory / CATEGORIES_FILE

    logger.debug("Reading MCC dataset from %s", directory)

    return DatasetRecords(
        codes=read_json_file(codes_path, list),
        ranges=read_json_file(ranges_path, list),
        categories=read_json_file(categories_path, dict),
        codes_source=str(codes_path),
        ranges_source=str(ranges_path),
        categories_source=str(categories_path),
    )
