from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from app.localization import (
    Culture,
    FormatMismatch,
    LocalizationEngine,
    LocalizedValue,
    ResourceStore,
    ResourceUnavailable,
    format_template,
    reset_current_culture,
    resolve,
    set_current_culture,
)


@pytest.fixture
def load_counter(monkeypatch: pytest.MonkeyPatch, store: ResourceStore) -> list[str]:
    """Record every key looked up in the backing resource."""
    calls: list[str] = []
    original = ResourceStore.get

    def counting_get(resource_map, key):
        calls.append(key)
        return original(resource_map, key)

    monkeypatch.setattr(store, "get", counting_get)
    return calls


def test_get_returns_stored_text(engine: LocalizationEngine, resources_dir: Path, en_us, pt_br):
    for culture in (en_us, pt_br):
        data = json.loads((resources_dir / f"{culture}.json").read_text(encoding="utf-8"))
        for key, text in data.items():
            assert engine.get(key, culture) == LocalizedValue(key, text, False)


def test_get_unknown_key_returns_key(engine: LocalizationEngine, pt_br):
    result = engine.get("does.not.exist", pt_br)
    assert result.value == "does.not.exist"
    assert result.resource_not_found is True
    assert str(result) == "does.not.exist"


def test_second_get_is_a_cache_hit(engine: LocalizationEngine, load_counter, en_us):
    first = engine.get("hi", en_us)
    second = engine.get("hi", en_us)
    assert first == second
    assert load_counter == ["hi"]
    assert engine.cache.stats.hits == 1


def test_missing_key_is_looked_up_every_time(engine: LocalizationEngine, load_counter, en_us):
    engine.get("nope", en_us)
    engine.get("nope", en_us)
    assert load_counter == ["nope", "nope"]


def test_empty_text_is_found_but_not_cached(engine: LocalizationEngine, load_counter, en_us):
    result = engine.get("empty", en_us)
    assert result == LocalizedValue("empty", "", False)
    engine.get("empty", en_us)
    assert load_counter == ["empty", "empty"]


def test_unavailable_resource_is_not_found(engine: LocalizationEngine, caplog):
    result = engine.get("hi", Culture.parse("fr-FR"))
    assert result == LocalizedValue("hi", "hi", True)
    assert "fr-FR" in caplog.text


def test_default_culture_used_without_context(engine: LocalizationEngine):
    assert engine.get("hi").value == "Hello!"


def test_context_culture_is_used(engine: LocalizationEngine, pt_br):
    token = set_current_culture(pt_br)
    try:
        assert engine.get("hi").value == "Olá!"
    finally:
        reset_current_culture(token)
    assert engine.get("hi").value == "Hello!"


def test_unknown_culture_resolves_like_no_culture(engine: LocalizationEngine, en_us, pt_br):
    known = {en_us, pt_br}
    for requested in ("fr-FR", "not a culture!", None):
        culture = resolve(requested, default=engine.default_culture, known=known)
        assert engine.get("hi", culture) == engine.get("hi")


def test_case_insensitive_culture(engine: LocalizationEngine, en_us, pt_br):
    known = {en_us, pt_br}
    a = resolve("EN-us", default=pt_br, known=known)
    b = resolve("en-US", default=pt_br, known=known)
    assert engine.get("hi", a) == engine.get("hi", b) == LocalizedValue("hi", "Hello!")


def test_get_formatted(engine: LocalizationEngine, en_us, pt_br):
    assert engine.get_formatted("welcome", ["Ana"], en_us) == LocalizedValue(
        "welcome", "Welcome, Ana!", False
    )
    assert engine.get_formatted("welcome", ["Ana"], pt_br).value == "Bem-vindo, Ana!"
    assert engine.get_formatted("pair", [1, "dois"], pt_br).value == "1 e dois"


def test_get_formatted_not_found_is_unchanged(engine: LocalizationEngine, en_us):
    result = engine.get_formatted("missing", ["Ana"], en_us)
    assert result == LocalizedValue("missing", "missing", True)


def test_get_formatted_too_few_arguments(engine: LocalizationEngine, en_us):
    with pytest.raises(FormatMismatch) as ei:
        engine.get_formatted("pair", ["only one"], en_us)
    assert ei.value.key == "pair"
    assert ei.value.arg_count == 1


def test_get_formatted_arguments_without_placeholders(engine: LocalizationEngine, en_us):
    with pytest.raises(FormatMismatch):
        engine.get_formatted("plain", ["extra"], en_us)


def test_get_formatted_no_arguments_no_placeholders(engine: LocalizationEngine, en_us):
    assert engine.get_formatted("plain", [], en_us).value == "No placeholders here"


@pytest.mark.parametrize(
    "template, args",
    [
        ("Hello {name}", ["Ana"]),
        ("Broken {0", ["Ana"]),
        ("Broken }", []),
        ("{0:%Y}", ["Ana"]),
    ],
)
def test_format_template_mismatch(template, args):
    with pytest.raises(FormatMismatch):
        format_template("k", template, args)


def test_format_template_escaped_braces():
    assert format_template("k", "{{literal}} {0}", ["x"]) == "{literal} x"


def test_get_all(engine: LocalizationEngine, resources_dir: Path, pt_br):
    data = json.loads((resources_dir / "pt-BR.json").read_text(encoding="utf-8"))
    items = engine.get_all(pt_br)
    assert {i.name for i in items} == set(data)
    assert all(not i.resource_not_found for i in items)
    assert {i.name: i.value for i in items} == data


def test_get_all_bypasses_cache(engine: LocalizationEngine, en_us):
    engine.get_all(en_us)
    assert engine.cache.stats.size == 0


def test_get_all_unavailable_propagates(engine: LocalizationEngine):
    with pytest.raises(ResourceUnavailable):
        engine.get_all(Culture.parse("fr-FR"))


def test_string_localizer(engine: LocalizationEngine, pt_br):
    localizer = engine.for_culture(pt_br)
    assert localizer["hi"].value == "Olá!"
    assert localizer.get_formatted("welcome", "Ana").value == "Bem-vindo, Ana!"
    assert len(localizer.get_all()) == 4


def test_cross_culture_isolation_under_concurrency(engine: LocalizationEngine, en_us, pt_br):
    def request(culture: Culture) -> list[str]:
        token = set_current_culture(culture)
        try:
            return [engine.get("hi").value for _ in range(50)]
        finally:
            reset_current_culture(token)

    cultures = [en_us, pt_br] * 16
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(request, cultures))

    for culture, texts in zip(cultures, results):
        expected = "Hello!" if culture == en_us else "Olá!"
        assert set(texts) == {expected}


def test_deeply_nested_resource_is_not_found(tmp_path: Path, cache):
    (tmp_path / "en-US.json").write_text("[" * 200000 + "]" * 200000, encoding="utf-8")
    engine = LocalizationEngine(ResourceStore(tmp_path), cache, Culture.parse("en-US"))
    assert engine.get("hi") == LocalizedValue("hi", "hi", True)
