from __future__ import annotations

from app.localization.cache import CacheStats, LocalizationCache
from app.localization.culture import (
    Culture,
    get_current_culture,
    known_cultures,
    negotiate,
    parse_accept_language,
    reset_current_culture,
    resolve,
    set_current_culture,
)
from app.localization.engine import (
    LocalizationEngine,
    LocalizedValue,
    StringLocalizer,
    format_template,
)
from app.localization.errors import (
    FormatMismatch,
    InvalidCulture,
    LocalizationError,
    ResourceUnavailable,
)
from app.localization.resources import ResourceMap, ResourceStore

__all__ = [
    "CacheStats",
    "Culture",
    "FormatMismatch",
    "InvalidCulture",
    "LocalizationCache",
    "LocalizationEngine",
    "LocalizationError",
    "LocalizedValue",
    "ResourceMap",
    "ResourceStore",
    "ResourceUnavailable",
    "StringLocalizer",
    "format_template",
    "get_current_culture",
    "known_cultures",
    "negotiate",
    "parse_accept_language",
    "reset_current_culture",
    "resolve",
    "set_current_culture",
]
