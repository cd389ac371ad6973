from __future__ import annotations

import pytest

from inplace_iter.runtime import IterationConfig, configure, get_config, load_config


def test_default_config_enables_guard(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("INPLACE_ITER_LIFETIME_GUARD", raising=False)

    assert load_config() == IterationConfig(lifetime_guard=True)


@pytest.mark.parametrize("raw, expected", [("off", False), ("yes", True), ("0", False)])
def test_environment_flag_parsing(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool
) -> None:
    monkeypatch.setenv("INPLACE_ITER_LIFETIME_GUARD", raw)

    assert get_config().lifetime_guard is expected


def test_invalid_environment_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INPLACE_ITER_LIFETIME_GUARD", "sometimes")

    with pytest.raises(ValueError):
        load_config()


def test_configure_overrides_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INPLACE_ITER_LIFETIME_GUARD", "1")

    configured = configure(lifetime_guard=False)

    assert configured.lifetime_guard is False
    assert get_config() is configured


def test_configure_rejects_unknown_fields() -> None:
    with pytest.raises(TypeError):
        configure(unknown=True)
