"""Settings loading with deterministic precedence.

The cascade is always:
1) CLI params
2) Environment variables
3) ~/.config/jsendkit/jsendkit.yaml (or an explicit ``config_path``)
4) Built-in defaults

Environment variable format:
- Prefix: ``JSENDKIT_``
- Nested keys: ``__`` separator
- Example: ``JSENDKIT_WIRE__STYLE=flattened`` -> ``wire.style = "flattened"``
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

from pydantic_settings import SettingsConfigDict

from .models import DEFAULT_CONFIG_PATH, JsendSettings


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> JsendSettings:
    """Resolve settings from CLI params, environment and one YAML file."""
    resolved = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    settings_cls = _settings_for_path(resolved)
    return settings_cls(**dict(cli_params or {}))


@lru_cache(maxsize=1)
def get_settings() -> JsendSettings:
    """Return process-wide settings, loaded once."""
    return load_settings()


@lru_cache(maxsize=16)
def _settings_for_path(path: Path) -> type[JsendSettings]:
    """Return a ``JsendSettings`` subclass bound to one YAML file."""
    if path == DEFAULT_CONFIG_PATH:
        return JsendSettings
    return type(
        "JsendSettings",
        (JsendSettings,),
        {
            "__module__": JsendSettings.__module__,
            "model_config": SettingsConfigDict(yaml_file=path),
        },
    )
