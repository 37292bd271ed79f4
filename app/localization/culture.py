"""
Culture parsing and negotiation.

A culture is a language/region pair such as ``en-US``. Incoming preferences
come from the ``Accept-Language`` header and are matched case-insensitively
against the set of cultures the host recognizes. Anything that does not
match (unknown or malformed tags) silently falls back to the default.

The active culture of a request lives in a ``ContextVar`` so concurrent
requests never observe each other's selection.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from contextvars import ContextVar, Token
from dataclasses import dataclass
from functools import lru_cache

from babel import Locale, UnknownLocaleError
from babel.core import parse_locale
from babel.localedata import locale_identifiers

from app.localization.errors import InvalidCulture

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Culture:
    """Normalized culture identifier (``pt-BR``, ``en-US``, ``sr-Latn-BA``)."""

    language: str
    territory: str | None = None
    script: str | None = None

    @property
    def name(self) -> str:
        return "-".join(p for p in (self.language, self.script, self.territory) if p)

    def __str__(self) -> str:
        return self.name

    @classmethod
    def parse(cls, tag: str) -> Culture:
        """
        Parse a culture tag. ``-`` and ``_`` are both accepted as separators,
        casing is normalized (``EN-us`` -> ``en-US``).

        Raises:
            InvalidCulture: if the tag is empty or not a language[-script][-region] tag.
        """
        raw = (tag or "").strip().replace("_", "-")
        if not raw:
            raise InvalidCulture("Empty culture tag")
        # parse_locale would silently strip ".encoding" and "@modifier" suffixes.
        if "." in raw or "@" in raw:
            raise InvalidCulture(f"Malformed culture tag {tag!r}")
        try:
            parts = parse_locale(raw, sep="-")
        except ValueError as exc:
            raise InvalidCulture(f"Malformed culture tag {tag!r}: {exc}") from exc
        language, territory, script, variant = parts[:4]
        if variant or len(parts) > 4:
            raise InvalidCulture(f"Unsupported culture tag {tag!r}")
        return cls(language=language, territory=territory, script=script)


# --- Active culture (per request) ---

_CURRENT_CULTURE: ContextVar[Culture | None] = ContextVar("current_culture", default=None)


def set_current_culture(culture: Culture) -> Token:
    return _CURRENT_CULTURE.set(culture)


def reset_current_culture(token: Token) -> None:
    _CURRENT_CULTURE.reset(token)


def get_current_culture() -> Culture | None:
    return _CURRENT_CULTURE.get()


# --- Known cultures ---


@lru_cache
def _babel_cultures() -> frozenset[Culture]:
    cultures: set[Culture] = set()
    for identifier in locale_identifiers():
        try:
            cultures.add(Culture.parse(identifier))
        except InvalidCulture:
            # e.g. en_US_POSIX
            continue
    return frozenset(cultures)


def known_cultures(names: Iterable[str], *, accept_any: bool = False) -> frozenset[Culture]:
    """
    Build the set of cultures recognized by the host.

    Each configured name must parse and exist in babel's locale data; names
    that do not are logged and dropped. With ``accept_any`` every locale
    known to babel is accepted as well.
    """
    cultures: set[Culture] = set()
    for name in names:
        try:
            culture = Culture.parse(name)
            Locale.parse(culture.name, sep="-")
        except (InvalidCulture, UnknownLocaleError, ValueError) as exc:
            logger.warning("Dropping unrecognized culture %r: %s", name, exc)
            continue
        cultures.add(culture)
    if accept_any:
        cultures.update(_babel_cultures())
    return frozenset(cultures)


# --- Resolution ---


def resolve(
    requested: str | None,
    default: Culture,
    known: Iterable[Culture],
) -> Culture:
    """
    Select the active culture for a single requested tag.

    Empty, malformed and unknown tags all resolve to ``default``; this never raises.
    """
    if not requested or not requested.strip():
        return default
    return _match(requested, frozenset(known)) or default


def _match(tag: str, known: frozenset[Culture]) -> Culture | None:
    try:
        candidate = Culture.parse(tag)
    except InvalidCulture:
        logger.debug("Ignoring malformed culture %r", tag)
        return None
    if candidate in known:
        return candidate
    logger.debug("Culture %s is not known", candidate)
    return None


def parse_accept_language(header: str | None) -> list[str]:
    """
    Split an Accept-Language value into tags ordered by preference.

    Small parser: respects ``q=`` weights (stable for ties), drops ``*`` and
    ``q=0`` entries, treats an unparsable or non-finite weight as 1.0.
    """
    if not header:
        return []

    weighted: list[tuple[float, str]] = []
    for part in header.split(","):
        part = part.strip()
        if not part:
            continue
        tag, *params = [p.strip() for p in part.split(";")]
        q = 1.0
        for param in params:
            if param.startswith("q="):
                try:
                    q = float(param[2:])
                except ValueError:
                    q = 1.0
                if not math.isfinite(q):
                    q = 1.0
        if tag == "*" or q <= 0:
            continue
        weighted.append((q, tag))

    weighted.sort(key=lambda item: item[0], reverse=True)
    return [tag for _, tag in weighted]


def negotiate(
    header: str | None,
    default: Culture,
    known: Iterable[Culture],
) -> Culture:
    """Pick the first known culture from an Accept-Language header, else ``default``."""
    known_set = frozenset(known)
    for tag in parse_accept_language(header):
        culture = _match(tag, known_set)
        if culture is not None:
            return culture
    return default
