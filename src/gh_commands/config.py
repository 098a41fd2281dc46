"""Configuration loading and validation."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_API_HOST = "github.com"


class ApiConfig(BaseModel):
    """GitHub API endpoint configuration."""

    model_config = ConfigDict(frozen=True)

    host: str = DEFAULT_API_HOST
    timeout_seconds: float = Field(default=30.0, gt=0)
    api_version: str = "2022-11-28"

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Strip trailing slashes and reject empty hosts."""
        v = v.strip().rstrip("/")
        if not v:
            msg = "host must not be empty"
            raise ValueError(msg)
        return v


class DefaultsConfig(BaseModel):
    """Owner/repository used when a command is not given one."""

    model_config = ConfigDict(frozen=True)

    owner: str = ""
    repository: str = ""


class AuthConfig(BaseModel):
    """GitHub authentication configuration."""

    model_config = ConfigDict(frozen=True)

    token_env: str = "GITHUB_TOKEN"
    use_gh_cli: bool = True


class RetryConfig(BaseModel):
    """Retry and backoff configuration."""

    model_config = ConfigDict(frozen=True)

    max_retries: int = Field(default=3, ge=0)
    retry_delay_seconds: float = Field(default=1.0, ge=0)
    max_backoff_seconds: float = Field(default=60.0, ge=0)
    max_rate_limit_wait_seconds: float = Field(
        default=900.0, ge=0, description="Fail instead of waiting longer than this for a reset"
    )


class TelemetryConfig(BaseModel):
    """Telemetry configuration."""

    model_config = ConfigDict(frozen=True)

    disabled: bool = False


class Config(BaseModel):
    """Root configuration model.

    Also acts as the configuration provider consumed by the invoker and the
    command groups. The model is frozen so it can be shared between
    concurrent calls.
    """

    model_config = ConfigDict(frozen=True)

    api: ApiConfig = Field(default_factory=ApiConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    def get_api_host(self) -> str:
        return self.api.host

    def get_default_owner(self) -> str:
        return self.defaults.owner

    def get_default_repository(self) -> str:
        return self.defaults.repository

    def get_max_retries(self) -> int:
        return self.retry.max_retries

    def get_retry_delay_seconds(self) -> float:
        return self.retry.retry_delay_seconds

    def is_telemetry_disabled(self) -> bool:
        return self.telemetry.disabled

    @property
    def api_base_url(self) -> str:
        """Base URL of the REST API for the configured host.

        ``github.com`` maps to ``https://api.github.com``; any other bare host
        is treated as GitHub Enterprise Server (``https://<host>/api/v3``).
        A host that already carries a scheme is used unchanged.
        """
        host = self.api.host
        if host.startswith(("http://", "https://")):
            return host
        if host in (DEFAULT_API_HOST, "api.github.com"):
            return "https://api.github.com"
        return f"https://{host}/api/v3"


def load_config(path: Path) -> Config:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValidationError: If the config is invalid.
    """
    if not path.exists():
        msg = f"Config file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open() as f:
        raw_config: dict[str, Any] = yaml.safe_load(f) or {}

    return Config.model_validate(raw_config)
