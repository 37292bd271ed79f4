# ruff: noqa: E402
import json
import sys
from pathlib import Path

# Ensure project root on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from app.localization import Culture, LocalizationCache, LocalizationEngine, ResourceStore

EN_US = {
    "hi": "Hello!",
    "welcome": "Welcome, {0}!",
    "plain": "No placeholders here",
    "pair": "{0} and {1}",
    "empty": "",
}
PT_BR = {
    "hi": "Olá!",
    "welcome": "Bem-vindo, {0}!",
    "plain": "Sem marcadores",
    "pair": "{0} e {1}",
}


@pytest.fixture
def resources_dir(tmp_path: Path) -> Path:
    d = tmp_path / "languages"
    d.mkdir()
    (d / "en-US.json").write_text(json.dumps(EN_US), encoding="utf-8")
    (d / "pt-BR.json").write_text(json.dumps(PT_BR, ensure_ascii=False), encoding="utf-8")
    return d


@pytest.fixture
def store(resources_dir: Path) -> ResourceStore:
    return ResourceStore(resources_dir)


@pytest.fixture
def cache() -> LocalizationCache:
    return LocalizationCache()


@pytest.fixture
def engine(store: ResourceStore, cache: LocalizationCache) -> LocalizationEngine:
    return LocalizationEngine(store, cache, Culture.parse("en-US"))


@pytest.fixture
def en_us() -> Culture:
    return Culture.parse("en-US")


@pytest.fixture
def pt_br() -> Culture:
    return Culture.parse("pt-BR")
