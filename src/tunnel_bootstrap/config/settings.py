"""Runtime configuration settings for tunnel-bootstrap.

This module uses Pydantic Settings for configuration read from the
environment. This provides:
- Type validation
- GitHub Actions input variables (INPUT_ prefix)
- Runner-provided variables (GITHUB_OUTPUT, RUNNER_TEMP, ...)
- Tool overrides (TUNNEL_BOOTSTRAP_ prefix)
- Easy testing via dependency injection
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tunnel_bootstrap.constants import (
    DEFAULT_PROTOCOL,
    ERROR_INVALID_LOG_LEVEL,
    LOG_LEVEL_INFO,
    VALID_LOG_LEVELS,
)


class ActionInputs(BaseSettings):
    """Inputs passed to the action.

    GitHub exposes `with:` inputs as INPUT_<NAME> environment variables.
    """

    model_config = SettingsConfigDict(env_prefix="INPUT_")

    protocol: str = Field(
        default=DEFAULT_PROTOCOL,
        description="Protocol of the local service (tcp, http, ssh, ...)",
    )
    port: str = Field(
        default="",
        description="Local port to expose",
    )

    @field_validator("protocol", mode="before")
    @classmethod
    def _default_blank_protocol(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_PROTOCOL
        return value.strip() if isinstance(value, str) else value

    @field_validator("port", mode="before")
    @classmethod
    def _normalize_port(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, int):
            return str(value)
        return value.strip() if isinstance(value, str) else value


class RunnerSettings(BaseSettings):
    """Variables set by the CI runner.

    These are read without a prefix, exactly as the runner exports them.
    """

    model_config = SettingsConfigDict(env_prefix="")

    github_output: Path | None = Field(
        default=None,
        description="File that step outputs are appended to",
    )
    github_action_path: Path | None = Field(
        default=None,
        description="Directory of the running action",
    )
    runner_temp: Path | None = Field(
        default=None,
        description="Per-job temporary directory",
    )
    runner_debug: bool = Field(
        default=False,
        description="Set when step debug logging is enabled",
    )

    @field_validator("github_output", "github_action_path", "runner_temp", mode="before")
    @classmethod
    def _blank_path_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class BootstrapSettings(BaseSettings):
    """Tool settings.

    Can be overridden via environment variables with TUNNEL_BOOTSTRAP_ prefix.
    """

    model_config = SettingsConfigDict(env_prefix="TUNNEL_BOOTSTRAP_")

    work_dir: Path | None = Field(
        default=None,
        description="Directory for the binary and log (defaults to the action path or cwd)",
    )
    log_level: str = Field(
        default=LOG_LEVEL_INFO,
        description="Logging level (DEBUG, INFO, WARNING or ERROR)",
    )
    download_timeout_seconds: float = Field(
        default=120.0,
        description="Timeout for downloading the cloudflared artifact",
    )
    update_timeout_seconds: float = Field(
        default=60.0,
        description="Timeout for the best-effort `cloudflared update` run",
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                ERROR_INVALID_LOG_LEVEL.format(level=value, expected=", ".join(VALID_LOG_LEVELS))
            )
        return level


def resolve_work_dir(
    runner: RunnerSettings,
    bootstrap: BootstrapSettings,
    override: Path | None = None,
) -> Path:
    """Pick the directory that holds the binary and the tunnel log.

    Precedence: explicit override, TUNNEL_BOOTSTRAP_WORK_DIR, GITHUB_ACTION_PATH, cwd.
    """
    for candidate in (override, bootstrap.work_dir, runner.github_action_path):
        if candidate is not None:
            return candidate.resolve()
    return Path.cwd()

