from __future__ import annotations

from pathlib import Path


class LocalizationError(Exception):
    """Base class for localization failures."""


class InvalidCulture(LocalizationError, ValueError):
    """Raised when a culture tag cannot be parsed into language/region parts."""


class ResourceUnavailable(LocalizationError):
    """Raised when the resource for a culture is missing or cannot be parsed."""

    def __init__(self, culture: str, path: Path, reason: str) -> None:
        super().__init__(f"Resource for culture '{culture}' unavailable ({path}): {reason}")
        self.culture = culture
        self.path = path
        self.reason = reason


class FormatMismatch(LocalizationError):
    """Raised when formatting arguments do not fit a resolved template."""

    def __init__(self, key: str, template: str, arg_count: int, reason: str) -> None:
        super().__init__(
            f"Cannot format '{key}' with {arg_count} argument(s): {reason}"
        )
        self.key = key
        self.template = template
        self.arg_count = arg_count
        self.reason = reason
