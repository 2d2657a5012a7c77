"""Typed configuration models for jsendkit runtime settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from jsendkit.envelope.wire import WireStyle

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "jsendkit" / "jsendkit.yaml"
DEFAULT_MAX_BODY_BYTES = 2 * 1024 * 1024


class LoggingSettings(BaseModel):
    """Structured logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True
    service: str = "jsendkit"
    environment: str = "dev"


class WireSettings(BaseModel):
    """Wire format used when envelopes are rendered as HTTP responses."""

    style: WireStyle = WireStyle.NESTED


class ExtractorSettings(BaseModel):
    """Limits applied by request extractors."""

    max_body_bytes: int = Field(default=DEFAULT_MAX_BODY_BYTES, gt=0)


class JsendSettings(BaseSettings):
    """Root runtime settings resolved from init/env/yaml/defaults sources."""

    model_config = SettingsConfigDict(
        env_prefix="JSENDKIT_",
        env_nested_delimiter="__",
        extra="ignore",
        nested_model_default_partial_update=True,
        yaml_file=DEFAULT_CONFIG_PATH,
        yaml_file_encoding="utf-8",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    wire: WireSettings = Field(default_factory=WireSettings)
    extractors: ExtractorSettings = Field(default_factory=ExtractorSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply precedence: init > env > yaml > model defaults."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
        )
