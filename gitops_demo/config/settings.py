"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gitops_demo.domain import BuildMetadata

_LOG_LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for HTTP runtime configuration.

    Environment variable names map directly to field names in uppercase.
    Example: `port` reads from `PORT`. Process environment values take
    precedence over values from the optional `.env` file, and empty values
    are treated as unset.

    Attributes:
        host: Host interface for web server binding.
        port: Web server port as decimal text.
        log_level: Minimum level name for emitted log records.
        shutdown_timeout_seconds: Drain deadline for in-flight requests on shutdown.
        idle_timeout_seconds: Keep-alive idle timeout for client connections.
        read_timeout_seconds: Deadline for receiving a full request body.
        write_timeout_seconds: Deadline for sending a full response.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
    )

    host: str = Field(default="0.0.0.0")
    port: str = Field(default="8080")
    log_level: str = Field(default="INFO")
    shutdown_timeout_seconds: float = Field(default=15.0, gt=0)
    idle_timeout_seconds: float = Field(default=120.0, gt=0)
    read_timeout_seconds: float = Field(default=30.0, gt=0)
    write_timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("port")
    @classmethod
    def _validate_port_digits(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value.isdigit():
            raise ValueError("port must be a decimal number")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in _LOG_LEVEL_NAMES:
            raise ValueError(f"unknown log level: {value}")
        return normalized_value


class BuildMetadataSettings(BaseSettings):
    """Build identification baked into the image environment at packaging time.

    Attributes:
        tag: Release tag, read from `BUILD_TAG`.
        commit: Source commit hash, read from `BUILD_COMMIT`.
        time: Build timestamp, read from `BUILD_TIME`.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUILD_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
    )

    tag: str = Field(default="dev")
    commit: str = Field(default="unknown")
    time: str = Field(default="unknown")


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"configuration: startup validation failed. Update .env or environment variables. Details: {error}"
        ) from error


def config_load_build_metadata() -> BuildMetadata:
    """Load build metadata injected by the packaging step.

    Returns:
        BuildMetadata: Build metadata with defaults for values not injected.

    Raises:
        SettingsLoadError: Raised when build metadata settings are invalid.
    """

    try:
        build_settings = BuildMetadataSettings()
    except ValidationError as error:
        raise SettingsLoadError(f"configuration: build metadata validation failed. Details: {error}") from error

    return BuildMetadata(
        tag=build_settings.tag,
        commit=build_settings.commit,
        build_time=build_settings.time,
    )
