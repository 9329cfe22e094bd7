"""Configuration file loading and validation."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, HttpUrl, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .consts import (
    DATA_DIR_DEFAULT,
    LOG_FILE_DEFAULT,
    LOGIN_PATH,
    TIMEOUT_HTTP_REQUEST,
    TOKEN_FILE_DEFAULT,
)
from .errors import ConfigException

logger = logging.getLogger(__name__)

ENV_PREFIX = "DOCKYARD_"


class ApiConfig(BaseModel):
    """Gateway API connection settings."""

    base_url: HttpUrl = Field(default="http://localhost:8000", validate_default=True)
    api_key: str = ""
    timeout: int = Field(default=TIMEOUT_HTTP_REQUEST, ge=1)
    extra_headers: dict[str, str] = Field(default_factory=dict)


class AuthConfig(BaseModel):
    """Where credentials live between CLI invocations."""

    token_file: str = Field(default=TOKEN_FILE_DEFAULT)
    login_path: str = Field(default=LOGIN_PATH)

    @field_validator("login_path")
    @classmethod
    def validate_login_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError(f"login_path must start with '/': {v}")
        return v


class WebConfig(BaseModel):
    """Schema service configuration."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=5000, ge=1, le=65535)
    debug: bool = Field(default=False)


class WidgetConfig(BaseModel):
    """Embed snippet settings."""

    script_url: str = ""
    react_umd_url: str | None = None
    react_dom_umd_url: str | None = None


class Config(BaseSettings):
    """Application configuration."""

    data_dir: str = Field(default=DATA_DIR_DEFAULT)
    log_file: str = Field(default=LOG_FILE_DEFAULT)

    api: ApiConfig = Field(default_factory=ApiConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    widget: WidgetConfig = Field(default_factory=WidgetConfig)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @classmethod
    def default(cls) -> "Config":
        """Build configuration from environment variables and defaults only."""
        try:
            return cls()
        except ValidationError as e:
            raise ConfigException(format_validation_error(e)) from e

    @classmethod
    def load_from_file(cls, config_path: str) -> "Config":
        """Load configuration from specified path."""
        path = Path(config_path)
        if not path.exists():
            raise ConfigException(f"Configuration file not found: {config_path}")

        class _Config(cls):
            model_config = SettingsConfigDict(
                toml_file=str(path),
                env_prefix=ENV_PREFIX,
                env_nested_delimiter="__",
            )

        try:
            cfg = _Config()
        except ValidationError as e:
            raise ConfigException(format_validation_error(e)) from e
        except ValueError as e:
            raise ConfigException(f"Invalid TOML syntax in {config_path}: {e}") from e

        logger.debug(f"Configuration loaded from {config_path}")
        return cfg

    def token_path(self) -> Path:
        return Path(self.auth.token_file).expanduser()


def format_validation_error(e: ValidationError) -> str:
    error_lines = ["Configuration validation failed:"]
    for error in e.errors():
        loc = " -> ".join(str(item) for item in error["loc"])
        error_lines.append(f"  - {loc}: {error['msg']}" if loc else f"  - {error['msg']}")
    return "\n".join(error_lines)
