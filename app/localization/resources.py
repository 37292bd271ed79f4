from __future__ import annotations

import json
import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from app.localization.culture import Culture
from app.localization.errors import InvalidCulture, ResourceUnavailable
from app.utils.yaml_io import from_yaml

logger = logging.getLogger(__name__)

ResourceMap = Mapping[str, str]

# A resource file is a flat object of string -> string.
RESOURCE_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "propertyNames": {"type": "string"},
    "additionalProperties": {"type": "string"},
}

_YAML_EXTENSIONS = {".yaml", ".yml"}


class ResourceStore:
    """
    Loads per-culture key/text resources from ``<base_dir>/<culture><extension>``.

    Successful loads are memoized per culture; failures are not, so a file that
    appears later will be picked up on the next lookup.
    """

    def __init__(self, base_dir: str | Path, extension: str = ".json") -> None:
        self.base_dir = Path(base_dir)
        self.extension = extension if extension.startswith(".") else f".{extension}"
        self._validator = Draft202012Validator(RESOURCE_SCHEMA)
        self._loaded: dict[Culture, ResourceMap] = {}
        self._lock = threading.Lock()

    def path_for(self, culture: Culture) -> Path:
        return self.base_dir / f"{culture.name}{self.extension}"

    def load(self, culture: Culture) -> ResourceMap:
        """
        Return the read-only resource map for ``culture``.

        Raises:
            ResourceUnavailable: missing file, unreadable file, bad syntax or
                content that is not a flat string -> string object.
        """
        with self._lock:
            cached = self._loaded.get(culture)
        if cached is not None:
            return cached

        resource_map = self._read(culture)
        with self._lock:
            # Two concurrent first loads produce equal maps; keep the first.
            resource_map = self._loaded.setdefault(culture, resource_map)
        return resource_map

    @staticmethod
    def get(resource_map: ResourceMap, key: str) -> str | None:
        """Exact key match; no parent-culture fallback."""
        return resource_map.get(key)

    def available_cultures(self) -> list[Culture]:
        """Cultures that have a resource file under ``base_dir``."""
        if not self.base_dir.is_dir():
            return []
        cultures: list[Culture] = []
        for p in sorted(self.base_dir.glob(f"*{self.extension}")):
            try:
                cultures.append(Culture.parse(p.name[: -len(self.extension)]))
            except InvalidCulture:
                continue
        return cultures

    # --- helpers ---

    def _read(self, culture: Culture) -> ResourceMap:
        path = self.path_for(culture)
        if not path.is_file():
            raise ResourceUnavailable(culture.name, path, "file not found")
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ResourceUnavailable(culture.name, path, f"cannot read: {exc}") from exc

        try:
            data = self._parse(text)
        except (ValueError, RecursionError, yaml.YAMLError) as exc:
            raise ResourceUnavailable(culture.name, path, f"invalid content: {exc}") from exc

        try:
            self._validator.validate(data)
        except ValidationError as exc:
            raise ResourceUnavailable(
                culture.name, path, f"invalid structure: {exc.message}"
            ) from exc

        logger.info("Loaded %d resource(s) for %s from %s", len(data), culture, path)
        return MappingProxyType(dict(data))

    def _parse(self, text: str) -> Any:
        if self.extension in _YAML_EXTENSIONS:
            return from_yaml(text)
        return json.loads(text)
