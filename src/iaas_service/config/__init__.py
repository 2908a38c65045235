"""Service configuration."""

from .settings import LoggingConfig, ServiceSettings, load_settings

__all__ = ["LoggingConfig", "ServiceSettings", "load_settings"]
