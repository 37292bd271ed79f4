"""
Localization engine.

Resolves resource keys for a culture through the cache-aside layer, formats
positional templates (``"Welcome, {0}!"``) and enumerates a culture's
resources. The culture is always explicit: either passed in, taken from the
current request context, or the engine default.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from string import Formatter
from typing import Any

from app.localization.cache import LocalizationCache
from app.localization.culture import Culture, get_current_culture
from app.localization.errors import FormatMismatch, ResourceUnavailable
from app.localization.resources import ResourceStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocalizedValue:
    """Lookup result. Unresolved keys carry the key itself as ``value``."""

    name: str
    value: str
    resource_not_found: bool = False

    def __str__(self) -> str:
        return self.value


def format_template(key: str, template: str, args: Sequence[Any]) -> str:
    """
    Substitute positional ``args`` into ``template``.

    Raises:
        FormatMismatch: missing argument, named placeholder, malformed braces,
            or arguments given to a template without placeholders.
    """
    try:
        fields = [f for _, f, _, _ in Formatter().parse(template) if f is not None]
    except ValueError as exc:
        raise FormatMismatch(key, template, len(args), str(exc)) from exc

    if args and not fields:
        raise FormatMismatch(key, template, len(args), "template has no placeholders")
    for field in fields:
        head = field.split(".", 1)[0].split("[", 1)[0]
        if head and not head.isdigit():
            raise FormatMismatch(key, template, len(args), f"named placeholder {{{field}}}")

    try:
        return template.format(*args)
    except (IndexError, KeyError, ValueError, AttributeError, TypeError) as exc:
        raise FormatMismatch(key, template, len(args), str(exc)) from exc


class LocalizationEngine:
    """Shared, stateless-per-call resolver; safe to use from concurrent requests."""

    def __init__(
        self,
        store: ResourceStore,
        cache: LocalizationCache,
        default_culture: Culture,
    ) -> None:
        self.store = store
        self.cache = cache
        self.default_culture = default_culture

    def active_culture(self, culture: Culture | None = None) -> Culture:
        return culture or get_current_culture() or self.default_culture

    def get(self, key: str, culture: Culture | None = None) -> LocalizedValue:
        culture = self.active_culture(culture)
        value = self.cache.get_or_load(culture, key, lambda: self._lookup(culture, key))
        if value is None:
            return LocalizedValue(name=key, value=key, resource_not_found=True)
        return LocalizedValue(name=key, value=value)

    def get_formatted(
        self,
        key: str,
        args: Sequence[Any],
        culture: Culture | None = None,
    ) -> LocalizedValue:
        result = self.get(key, culture)
        if result.resource_not_found:
            return result
        return LocalizedValue(name=key, value=format_template(key, result.value, args))

    def get_all(self, culture: Culture | None = None) -> list[LocalizedValue]:
        """
        Every key/text pair of the culture's resource. Not cached per key.

        Raises:
            ResourceUnavailable: if the culture has no usable resource.
        """
        resource_map = self.store.load(self.active_culture(culture))
        return [LocalizedValue(name=k, value=v) for k, v in resource_map.items()]

    def for_culture(self, culture: Culture) -> StringLocalizer:
        return StringLocalizer(self, culture)

    def _lookup(self, culture: Culture, key: str) -> str | None:
        try:
            resource_map = self.store.load(culture)
        except ResourceUnavailable as exc:
            logger.warning("%s", exc)
            return None
        return self.store.get(resource_map, key)


class StringLocalizer:
    """Per-request view of the engine bound to one culture."""

    def __init__(self, engine: LocalizationEngine, culture: Culture) -> None:
        self.engine = engine
        self.culture = culture

    def __getitem__(self, key: str) -> LocalizedValue:
        return self.get(key)

    def get(self, key: str) -> LocalizedValue:
        return self.engine.get(key, self.culture)

    def get_formatted(self, key: str, *args: Any) -> LocalizedValue:
        return self.engine.get_formatted(key, args, self.culture)

    def get_all(self) -> list[LocalizedValue]:
        return self.engine.get_all(self.culture)
