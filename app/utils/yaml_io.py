# app/utils/yaml_io.py
# YAML serialization helpers with safe defaults.

from __future__ import annotations

from typing import Any

import yaml


def to_yaml(data: Any) -> str:
    """
    Serialize Python data to a YAML string using safe dumper.

    - Ensure Unicode output (translated text is rarely ASCII).
    - Block style for readability.
    - Sort keys disabled to keep resource file order.
    """
    return yaml.safe_dump(
        data,
        allow_unicode=True,
        default_flow_style=False,
        sort_keys=False,
    )


def from_yaml(text: str) -> Any:
    """Parse YAML text with the safe loader. Raises yaml.YAMLError on bad input."""
    return yaml.safe_load(text)
