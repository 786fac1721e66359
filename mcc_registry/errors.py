"""
MCC Registry Errors.

Every failure raised by the registry derives from MccError so callers
can catch the whole family at one boundary.

PROPAGATION:
- InvalidFormat / InvalidRange: corrupt dataset or programming error,
  always raised to the immediate caller
- NotFound / CategoryNotFound: only from the strict lookup variants;
  the lenient queries return None or an empty list instead
- DataLoadError: the whole load pass is discarded
- ConfigurationError: resolved settings failed validation
"""

from typing import Any


class MccError(Exception):
    """Base class for all MCC registry errors."""


class InvalidFormat(MccError, ValueError):
    """Raised when a value cannot be normalized to a 4-digit MCC."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Invalid MCC code format: {value!r}. Expected a 4-digit string or integer."
        )


class InvalidRange(MccError, ValueError):
    """Raised when a range starts after it ends."""

    def __init__(self, start_code: str, end_code: str):
        self.start_code = start_code
        self.end_code = end_code
        super().__init__(
            f"Start code ({start_code}) cannot be greater than end code ({end_code})"
        )


class NotFound(MccError, KeyError):
    """Raised by strict lookups when no code matches."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"MCC code not found: {value!r}")

    def __str__(self) -> str:
        return str(self.args[0])


class CategoryNotFound(MccError, KeyError):
    """Raised when a category id is absent from the loaded set."""

    def __init__(self, category: Any):
        self.category = category
        super().__init__(f"Category not found: {category!r}")

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidFilter(MccError, KeyError):
    """Raised when a filter names an attribute codes do not expose."""

    def __init__(self, key: str, accepted: tuple[str, ...]):
        self.key = key
        self.accepted = accepted
        super().__init__(f"Unknown filter attribute {key!r}. Accepted: {', '.join(accepted)}")

    def __str__(self) -> str:
        return str(self.args[0])


class ConfigurationError(MccError):
    """Raised when resolved configuration fails validation."""


class DataLoadError(MccError):
    """
    Raised when the dataset cannot be turned into registry records.

    Attributes:
        source: Identifier of the failing source (usually a file path)
        cause: The underlying exception, if any
    """

    def __init__(self, source: str, cause: BaseException | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load MCC data from: {source}"
        if cause is not None:
            message += f" ({cause})"
        super().__init__(message)
