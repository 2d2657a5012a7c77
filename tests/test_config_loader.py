"""Tests for pydantic-settings-backed jsendkit configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from jsendkit.config import DEFAULT_MAX_BODY_BYTES, get_settings, load_settings
from jsendkit.envelope import WireStyle


def _write_config(tmp_path: Path) -> Path:
    config_file = tmp_path / "jsendkit.yaml"
    config_file.write_text(
        "\n".join(
            [
                "logging:",
                "  level: WARNING",
                "  json_output: false",
                "wire:",
                "  style: flattened",
                "extractors:",
                "  max_body_bytes: 1024",
            ]
        ),
        encoding="utf-8",
    )
    return config_file


def test_load_settings_uses_precedence_cascade(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Init params should override env, env should override YAML, then defaults."""
    config_file = _write_config(tmp_path)
    monkeypatch.setenv("JSENDKIT_LOGGING__LEVEL", "ERROR")
    monkeypatch.setenv("JSENDKIT_EXTRACTORS__MAX_BODY_BYTES", "2048")

    settings = load_settings(
        cli_params={"logging": {"level": "DEBUG"}},
        config_path=config_file,
    )

    assert settings.logging.level == "DEBUG"
    assert settings.logging.json_output is False
    assert settings.logging.service == "jsendkit"
    assert settings.wire.style is WireStyle.FLATTENED
    assert settings.extractors.max_body_bytes == 2048


def test_load_settings_uses_model_defaults_when_sources_missing(tmp_path: Path) -> None:
    """Settings should fall back to model defaults when env and YAML are absent."""
    settings = load_settings(config_path=tmp_path / "missing.yaml")

    assert settings.logging.level == "INFO"
    assert settings.logging.json_output is True
    assert settings.wire.style is WireStyle.NESTED
    assert settings.extractors.max_body_bytes == DEFAULT_MAX_BODY_BYTES


def test_load_settings_rejects_invalid_values(tmp_path: Path) -> None:
    """Invalid values should surface as pydantic validation errors."""
    with pytest.raises(ValidationError):
        load_settings(
            cli_params={"extractors": {"max_body_bytes": 0}},
            config_path=tmp_path / "missing.yaml",
        )
    with pytest.raises(ValidationError):
        load_settings(
            cli_params={"wire": {"style": "sideways"}},
            config_path=tmp_path / "missing.yaml",
        )


def test_get_settings_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    """get_settings should load once until its cache is cleared."""
    monkeypatch.setenv("JSENDKIT_WIRE__STYLE", "flattened")
    first = get_settings()
    monkeypatch.setenv("JSENDKIT_WIRE__STYLE", "nested")

    assert get_settings() is first
    assert first.wire.style is WireStyle.FLATTENED

    get_settings.cache_clear()
    assert get_settings().wire.style is WireStyle.NESTED
