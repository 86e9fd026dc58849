"""Service configuration."""
import os
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, IPvAnyAddress, field_validator

from calculator_microservice.common.logger import SERVICE_NAME

# Environment variables read by ServiceSettings.from_env, keyed by field name
ENV_VARS: Dict[str, str] = {
    "host": "CALCULATOR_HOST",
    "port": "CALCULATOR_PORT",
    "log_dir": "CALCULATOR_LOG_DIR",
    "log_level": "CALCULATOR_LOG_LEVEL",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ServiceSettings(BaseModel):
    """
    Runtime settings of the calculator service.

    Values come from keyword arguments, or from the environment through
    ``from_env``; explicit keyword arguments always win.
    """

    # Settings are read once at startup and shared by every request
    model_config = ConfigDict(frozen=True)

    host: IPvAnyAddress = Field(default="127.0.0.1", description="Address the HTTP server binds to")
    port: int = Field(default=3000, ge=1, le=65535, description="HTTP server TCP port")
    log_dir: Path = Field(default=Path("logs"), description="Directory for error.log and combined.log")
    log_level: str = Field(default="INFO", description="Minimum level of the service logger")
    service_name: str = Field(default=SERVICE_NAME, description="Service name written in log records")

    @field_validator("log_level")
    def log_level_must_be_known(cls, v: str) -> str:
        """Normalize the level name and reject unknown levels."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    @classmethod
    def from_env(cls, **overrides: Any) -> "ServiceSettings":
        """
        Build settings from ``CALCULATOR_*`` environment variables.

        :param overrides: Field values taking precedence over the environment; ``None`` values are ignored

        :return: Validated settings
        :rtype: ServiceSettings
        """
        values: Dict[str, Any] = {
            field: os.environ[var] for field, var in ENV_VARS.items() if os.environ.get(var)
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
