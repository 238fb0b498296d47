"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings

from dynamo_readonly.core.exceptions import ConfigurationError


class AWSConfig(BaseSettings):
    """Credentials and region for the DynamoDB client. All three are required."""

    model_config = {"env_prefix": "AWS_"}

    access_key_id: str = Field(min_length=1)
    secret_access_key: SecretStr
    region: str = Field(min_length=1)

    @field_validator("secret_access_key")
    @classmethod
    def _secret_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("must not be empty")
        return value


class ServerConfig(BaseSettings):
    """Read-only server knobs."""

    model_config = {"env_prefix": "DYNAMO_READONLY_"}

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    endpoint_url: str | None = None  # LocalStack override
    scan_limit: int = Field(default=100, gt=0)
    max_pages: int | None = Field(default=None, gt=0)  # None = drain everything
    connect_timeout: float = 10.0
    read_timeout: float = 60.0
    max_attempts: int = Field(default=3, ge=1)


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "DYNAMO_READONLY_"}

    aws: AWSConfig = Field(default_factory=AWSConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


_ENV_NAMES = {
    "access_key_id": "AWS_ACCESS_KEY_ID",
    "secret_access_key": "AWS_SECRET_ACCESS_KEY",
    "region": "AWS_REGION",
}


def load_settings() -> AppSettings:
    """Build settings from the environment.

    Raises:
        ConfigurationError: if a required AWS setting is missing or any value
            fails validation. The process must not start in that case.
    """
    try:
        return AppSettings()
    except ValidationError as exc:
        problems = []
        for err in exc.errors():
            field = str(err["loc"][-1]) if err["loc"] else "?"
            name = _ENV_NAMES.get(field, f"DYNAMO_READONLY_{field.upper()}")
            problems.append(f"{name}: {err['msg']}")
        raise ConfigurationError(
            "Invalid configuration: " + "; ".join(problems)
        ) from exc
