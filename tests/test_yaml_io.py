from __future__ import annotations

from app.utils.yaml_io import from_yaml, to_yaml


def test_to_yaml_keeps_order_and_unicode():
    data = {"hi": "Olá!", "welcome": "Bem-vindo, {0}!"}
    s = to_yaml(data)
    assert isinstance(s, str)
    assert s.index("hi:") < s.index("welcome:")
    assert "Olá!" in s
    assert from_yaml(s) == data
