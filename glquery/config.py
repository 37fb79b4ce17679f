"""Configuration management for the GitLab listing client."""

from typing import Any, Literal

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from glquery.errors import ConfigurationError

TOKEN_LENGTH = 20
DEFAULT_PORTS = {"http": 80, "https": 443}


class ClientSettings(BaseSettings):
    """Client settings loaded from environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_file=(".env",),
        env_prefix="GITLAB_",
        extra="ignore",
    )

    hostname: str = Field(
        default="gitlab.com",
        description="Host name of the GitLab instance, without scheme or port.",
    )
    token: SecretStr = Field(
        default=SecretStr(""),
        description="Private token sent as the private_token query parameter.",
    )
    scheme: Literal["http", "https"] = Field(
        default="https",
        description="URL scheme used to reach the instance.",
    )
    port: int | None = Field(
        default=None,
        ge=1,
        le=65535,
        description="TCP port; unset means the scheme's standard port.",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout in seconds applied by the transport.",
    )
    per_page: int | None = Field(
        default=None,
        ge=1,
        le=100,
        description="Default page size; unset lets the server pick its own.",
    )

    @field_validator("hostname")
    @classmethod
    def _check_hostname(cls, value: str) -> str:
        if not value:
            msg = "hostname must not be empty"
            raise ValueError(msg)
        if value.startswith(".") or value.endswith("."):
            msg = f"hostname must not start or end with '.', got {value!r}"
            raise ValueError(msg)
        return value

    @field_validator("token")
    @classmethod
    def _check_token(cls, value: SecretStr) -> SecretStr:
        length = len(value.get_secret_value())
        if length != TOKEN_LENGTH:
            msg = f"GITLAB_TOKEN must be exactly {TOKEN_LENGTH} characters long (got {length})"
            raise ValueError(msg)
        return value

    @property
    def netloc(self) -> str:
        """Return ``host`` or ``host:port`` when the port is not the scheme default."""
        if self.port is None or self.port == DEFAULT_PORTS[self.scheme]:
            return self.hostname
        return f"{self.hostname}:{self.port}"


def load_settings(**overrides: Any) -> ClientSettings:
    """Load settings from supported sources, applying explicit overrides last.

    Raises:
        ConfigurationError: when any value fails validation.
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return ClientSettings(**values)
    except ValidationError as exc:
        raise ConfigurationError(_describe(exc)) from exc


def _describe(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "settings"
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)
