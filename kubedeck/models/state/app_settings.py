"""Application settings models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kubedeck.constants.defaults import (
    KUBECTL_BINARY_DEFAULT,
    LOG_FILE_DEFAULT,
    LOG_LEVEL_DEFAULT,
    SHELL_COMMAND_DEFAULT,
    THEME_DEFAULT,
)
from kubedeck.constants.limits import LOG_BUFFER_LINES_DEFAULT, LOG_BUFFER_LINES_MIN
from kubedeck.constants.timeouts import (
    LOG_FLUSH_INTERVAL,
    LOG_FLUSH_MAX_WAIT,
    LOG_RECONNECT_DELAY,
    POD_AGE_REFRESH_INTERVAL,
    STATS_POLL_INTERVAL,
    WATCH_RETRY_BACKOFF_BASE,
    WATCH_RETRY_BACKOFF_MAX,
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True)

    # Cluster access
    namespace: str = ""  # empty: kube context namespace, then "default"
    context: str = ""
    kubectl_binary: str = KUBECTL_BINARY_DEFAULT

    # UI preferences
    theme: str = THEME_DEFAULT
    pod_age_refresh_interval: float = Field(default=POD_AGE_REFRESH_INTERVAL, gt=0)

    # Log follow
    log_flush_interval: float = Field(default=LOG_FLUSH_INTERVAL, gt=0)
    log_flush_max_wait: float = Field(default=LOG_FLUSH_MAX_WAIT, gt=0)
    log_reconnect_delay: float = Field(default=LOG_RECONNECT_DELAY, ge=0)
    log_buffer_lines: int = Field(default=LOG_BUFFER_LINES_DEFAULT, ge=LOG_BUFFER_LINES_MIN)

    # Resources usage
    stats_poll_interval: float = Field(default=STATS_POLL_INTERVAL, gt=0)

    # Pods watch restart policy
    watch_retry_backoff_base: float = Field(default=WATCH_RETRY_BACKOFF_BASE, ge=0)
    watch_retry_backoff_max: float = Field(default=WATCH_RETRY_BACKOFF_MAX, ge=0)

    # Remote shell
    shell_command: list[str] = list(SHELL_COMMAND_DEFAULT)

    # Diagnostics
    log_level: str = LOG_LEVEL_DEFAULT
    log_file: str = LOG_FILE_DEFAULT

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = str(value or LOG_LEVEL_DEFAULT).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("shell_command")
    @classmethod
    def _require_shell_command(cls, value: list[str]) -> list[str]:
        if not value:
            return list(SHELL_COMMAND_DEFAULT)
        return value


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""
