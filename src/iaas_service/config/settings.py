"""Service settings loaded from settings files and IAAS_SERVICE_* variables."""

from typing import Any, Optional, Sequence

from dynaconf import Dynaconf
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from iaas_service.application.setup.options import SetupOptions
from iaas_service.domain.base.exceptions import ConfigurationError

ENV_PREFIX = "IAAS_SERVICE"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Log level name")
    json_format: bool = Field(False, description="Emit JSON lines instead of console output")


class ServiceSettings(BaseModel):
    """Top level service configuration."""

    default_zone: str = Field("", description="Zone used when a request names none")
    setup: SetupOptions = Field(default_factory=SetupOptions, description="Setup engine defaults")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def setup_options(self, **overrides: Any) -> SetupOptions:
        """Copy of the default setup options with per-call overrides applied."""
        return self.setup.model_copy(update=overrides)


def _lower_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value


def load_settings(
    settings_files: Optional[Sequence[str]] = None,
    **overrides: Any,
) -> ServiceSettings:
    """
    Load service settings.

    Values come from ``settings_files`` (any format Dynaconf reads), then
    ``IAAS_SERVICE_*`` environment variables (``IAAS_SERVICE_SETUP__RETRY_COUNT=5``
    for nested keys), then keyword overrides.

    Raises:
        ConfigurationError: If the merged values do not validate
    """
    dynaconf_settings = Dynaconf(
        envvar_prefix=ENV_PREFIX,
        settings_files=list(settings_files or []),
        load_dotenv=False,
        merge_enabled=True,
    )
    data = _lower_keys(dynaconf_settings.as_dict())
    data.update(_lower_keys(overrides))

    try:
        return ServiceSettings(**data)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"invalid service settings: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False)},
        ) from e
