"""
MCC Collection — Dataset Owner and Query Engine.

The Collection owns every loaded Code, Range and Category and answers
all queries over them.

INVARIANTS:
1. All loaded state lives in ONE immutable snapshot; readers take the
   current snapshot reference once per query and never see a torn mix
   of old and new data
2. Load and reload run under a single lock; the loaded condition is
   re-tested after the lock is acquired
3. The code index, when built, is exactly {code.mcc: code for code in codes}
   of its own snapshot
4. A load pass is all-or-nothing: any failure raises DataLoadError and
   leaves the previous snapshot in place
5. Lookup misses are normal outcomes (None or an empty tuple), never errors, except
   in the strict variants
"""

import logging
import re
import time
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from functools import cached_property
from threading import Lock
from typing import Any

from mcc_registry.config import Settings, validate_configuration
from mcc_registry.errors import CategoryNotFound, DataLoadError, InvalidFilter, NotFound
from mcc_registry.models.category import Category, normalize_category_id
from mcc_registry.models.code import TEXT_FIELDS, Code
from mcc_registry.models.mcc_value import try_normalize_code
from mcc_registry.models.range import Range
from mcc_registry.services.data_loader import DatasetLoader, DatasetRecords, load_dataset

logger = logging.getLogger(__name__)


# =============================================================================
# FILTER ATTRIBUTES
# =============================================================================
# Keys accepted by Collection.where, each mapped to its accessor.

FILTER_ACCESSORS: dict[str, Callable[[Code, Settings], Any]] = {
    "mcc": lambda code, _: code.mcc,
    **{name: (lambda code, _, name=name: getattr(code, name)) for name in TEXT_FIELDS},
    "irs_reportable": lambda code, _: code.irs_reportable,
    "description": lambda code, settings: code.description(settings=settings),
}

FILTER_KEYS: tuple[str, ...] = tuple(FILTER_ACCESSORS)

SEARCH_FIELDS: tuple[str, ...] = ("mcc", *TEXT_FIELDS)


def _matches(actual: Any, expected: Any) -> bool:
    if isinstance(expected, re.Pattern):
        return expected.search("" if actual is None else str(actual)) is not None
    if isinstance(expected, (list, tuple, set, frozenset)):
        return actual in expected
    return actual == expected


# =============================================================================
# SNAPSHOT
# =============================================================================


@dataclass(frozen=True)
class DatasetSnapshot:
    """One consistent, immutable view of the loaded dataset."""

    codes: tuple[Code, ...] = ()
    ranges: tuple[Range, ...] = ()
    categories: tuple[Category, ...] = ()
    source: str = ""

    @cached_property
    def index(self) -> dict[str, Code]:
        """Normalized code -> Code, built on first lookup."""
        return {code.mcc: code for code in self.codes}

    @cached_property
    def search_text(self) -> tuple[tuple[Code, str], ...]:
        """Each code paired with its lower-cased searchable text."""
        pairs = []
        for code in self.codes:
            parts = [getattr(code, name) for name in SEARCH_FIELDS]
            pairs.append((code, " ".join(p for p in parts if p).lower()))
        return tuple(pairs)

    @cached_property
    def categories_by_id(self) -> dict[str, Category]:
        return {category.id: category for category in self.categories}


def build_snapshot(records: DatasetRecords) -> DatasetSnapshot:
    """
    Turn raw records into entity objects.

    Raises:
        DataLoadError: Naming the record set that failed, wrapping the cause
    """
    try:
        codes = tuple(Code.from_record(record) for record in records.codes)
        seen: set[str] = set()
        for code in codes:
            if code.mcc in seen:
                raise ValueError(f"duplicate MCC code {code.mcc}")
            seen.add(code.mcc)
    except Exception as e:
        raise DataLoadError(records.codes_source, e) from e

    try:
        ranges = tuple(Range.from_record(record) for record in records.ranges)
    except Exception as e:
        raise DataLoadError(records.ranges_source, e) from e

    try:
        categories = tuple(
            Category.from_record(category_id, record or {})
            for category_id, record in records.categories.items()
        )
        ids = [category.id for category in categories]
        if len(ids) != len(set(ids)):
            raise ValueError(f"duplicate category ids in {sorted(ids)}")
    except Exception as e:
        raise DataLoadError(records.categories_source, e) from e

    return DatasetSnapshot(
        codes=codes,
        ranges=ranges,
        categories=categories,
        source=records.codes_source,
    )


# =============================================================================
# COLLECTION
# =============================================================================


class Collection:
    """
    Loads, indexes and queries the MCC dataset.

    Data is loaded on first query. With caching enabled the snapshot is
    reused until reload(); with caching disabled every top-level query
    loads afresh.

    Safe to share between threads.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        loader: DatasetLoader | None = None,
    ) -> None:
        """
        Initialize an empty, unloaded collection.

        Args:
            settings: Resolved settings (a fresh Settings() if omitted)
            loader: Callable returning DatasetRecords for a data path.
                Defaults to reading the JSON dataset files.

        Raises:
            ConfigurationError: If settings fail validation
        """
        self._settings = settings if settings is not None else Settings()
        validate_configuration(self._settings)
        self._loader = loader or load_dataset
        self._snapshot: DatasetSnapshot | None = None
        self._lock = Lock()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def loaded(self) -> bool:
        return self._snapshot is not None

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def _load(self) -> DatasetSnapshot:
        """Run one load pass. Caller holds the lock."""
        started = time.perf_counter()
        records = self._loader(self._settings.data_path)
        snapshot = build_snapshot(records)
        logger.info(
            "MCC_DATASET_LOADED",
            extra={
                "codes": len(snapshot.codes),
                "ranges": len(snapshot.ranges),
                "categories": len(snapshot.categories),
                "source": snapshot.source,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return snapshot

    def _current(self) -> DatasetSnapshot:
        """Return the snapshot for this query, loading if needed."""
        snapshot = self._snapshot
        if snapshot is not None and self._settings.cache_enabled:
            return snapshot

        with self._lock:
            snapshot = self._snapshot
            if snapshot is not None and self._settings.cache_enabled:
                return snapshot
            if snapshot is not None:
                logger.debug("Cache disabled, reloading MCC dataset")
            snapshot = self._load()
            self._snapshot = snapshot
            return snapshot

    def ensure_loaded(self) -> "Collection":
        """Load the dataset if it is not loaded yet. Idempotent."""
        self._current()
        return self

    def reload(self) -> "Collection":
        """
        Replace all loaded data with a fresh load.

        The new snapshot is swapped in whole; on failure the previous one
        is kept.

        Raises:
            DataLoadError: If the data source cannot be loaded
        """
        with self._lock:
            logger.info("MCC_DATASET_RELOAD", extra={"data_path": self._settings.data_path})
            try:
                self._snapshot = self._load()
            except DataLoadError as e:
                logger.error(
                    "MCC_DATASET_RELOAD_FAILED",
                    extra={"source": e.source, "error": str(e)},
                )
                raise
        return self

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def all(self) -> tuple[Code, ...]:
        """Every loaded code in dataset order."""
        return self._current().codes

    def find(self, value: object) -> Code | None:
        """
        Find a code by value.

        Accepts text or integers (or a Code). Malformed input is a miss,
        not an error.
        """
        normalized = try_normalize_code(value)
        snapshot = self._current()
        if normalized is None:
            return None
        return snapshot.index.get(normalized)

    def find_or_fail(self, value: object) -> Code:
        """
        Find a code by value.

        Raises:
            NotFound: If no code matches
        """
        code = self.find(value)
        if code is None:
            raise NotFound(value)
        return code

    def is_valid(self, value: object) -> bool:
        """True if the value names a loaded code."""
        return self.find(value) is not None

    def count(self) -> int:
        return len(self.all())

    def __getitem__(self, value: object) -> Code:
        return self.find_or_fail(value)

    def __contains__(self, value: object) -> bool:
        return self.is_valid(value)

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[Code]:
        return iter(self.all())

    # -------------------------------------------------------------------------
    # Filtering and search
    # -------------------------------------------------------------------------

    def where(
        self, conditions: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> tuple[Code, ...]:
        """
        Filter codes on attribute conditions, ANDed together.

        Each condition value is one of:
        - a compiled regex: searched against the attribute as text
          (absent attributes are treated as "")
        - a list, tuple, set or frozenset: attribute must be a member
        - anything else: attribute must be equal

        Examples:
            >>> collection.where(irs_reportable=True)
            >>> collection.where({"iso_description": re.compile("veterinary", re.I)})
            >>> collection.where(mcc=["5411", "5499"])

        Raises:
            InvalidFilter: If a key is not a known Code attribute
        """
        merged: dict[str, Any] = {**(conditions or {}), **kwargs}
        for key in merged:
            if key not in FILTER_ACCESSORS:
                raise InvalidFilter(key, FILTER_KEYS)

        snapshot = self._current()
        if not merged:
            return snapshot.codes

        checks = [(FILTER_ACCESSORS[key], expected) for key, expected in merged.items()]
        return tuple(
            code
            for code in snapshot.codes
            if all(_matches(accessor(code, self._settings), want) for accessor, want in checks)
        )

    def search(self, query: str | None) -> tuple[Code, ...]:
        """
        Case-insensitive substring search over the code and all text fields.

        An empty or whitespace-only query returns every code.
        """
        snapshot = self._current()
        needle = "" if query is None else str(query)
        if not needle.strip():
            return snapshot.codes

        needle = needle.lower()
        return tuple(code for code, text in snapshot.search_text if needle in text)

    # -------------------------------------------------------------------------
    # Ranges
    # -------------------------------------------------------------------------

    def ranges(self) -> tuple[Range, ...]:
        return self._current().ranges

    def find_range(self, name: object) -> Range | None:
        """Range by name, case-insensitive."""
        target = str(getattr(name, "value", name)).lower()
        for candidate in self._current().ranges:
            if candidate.name.lower() == target:
                return candidate
        return None

    def in_range(self, name: object) -> tuple[Code, ...]:
        """Codes inside the named range, in dataset order. Empty if no such range."""
        snapshot = self._current()
        target = str(getattr(name, "value", name)).lower()
        found = next((r for r in snapshot.ranges if r.name.lower() == target), None)
        if found is None:
            return ()
        return tuple(code for code in snapshot.codes if found.includes(code.mcc))

    def range_for(self, value: object) -> Range | None:
        """First range containing the value, or None."""
        return next((r for r in self._current().ranges if r.includes(value)), None)

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def categories(self) -> tuple[Category, ...]:
        return self._current().categories

    def find_category(self, category: object) -> Category | None:
        """Category by id (or Category instance), or None."""
        return self._current().categories_by_id.get(normalize_category_id(category))

    def get_category(self, category: object) -> Category:
        """
        Category by id.

        Raises:
            CategoryNotFound: If no category has this id
        """
        found = self.find_category(category)
        if found is None:
            raise CategoryNotFound(category)
        return found

    def in_category(self, category: object) -> tuple[Code, ...]:
        """Codes belonging to the category. Empty if no such category."""
        snapshot = self._current()
        found = snapshot.categories_by_id.get(normalize_category_id(category))
        if found is None:
            return ()
        return tuple(code for code in snapshot.codes if found.includes(code.mcc))

    def categories_for(self, value: object) -> tuple[Category, ...]:
        """All categories containing the value."""
        return tuple(c for c in self._current().categories if c.includes(value))

    def code_in_category(self, value: object, category: object) -> bool:
        """True if the category exists and contains the value."""
        found = self.find_category(category)
        return found is not None and found.includes(value)

    def __repr__(self) -> str:
        snapshot = self._snapshot
        if snapshot is None:
            return "Collection(loaded=False)"
        return f"Collection(codes={len(snapshot.codes)}, source={snapshot.source!r})"

