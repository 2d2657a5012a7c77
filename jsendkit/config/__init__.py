"""Public API for jsendkit configuration."""

from .loader import get_settings, load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_MAX_BODY_BYTES,
    ExtractorSettings,
    JsendSettings,
    LoggingSettings,
    WireSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_MAX_BODY_BYTES",
    "ExtractorSettings",
    "JsendSettings",
    "LoggingSettings",
    "WireSettings",
    "get_settings",
    "load_settings",
]
