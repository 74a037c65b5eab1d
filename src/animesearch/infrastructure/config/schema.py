"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from animesearch.infrastructure.http.constants import (
    DEFAULT_ACCEPT_LANGUAGE,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
)

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


def _normalize_path(value: Any) -> Path:
    """
    Normalize a path-like value without causing filesystem side-effects.

    This function MUST NOT create directories or files.
    """
    if isinstance(value, Path):
        return value.expanduser()
    if isinstance(value, str):
        return Path(value).expanduser()
    raise TypeError(f"Expected path-like value, got: {type(value)!r}")


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (rules/http/search/logging).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="animesearch", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # Rules (YAML section: rules.rules_dir)
    rules_dir: Path = Field(
        default=Path("./rules"),
        validation_alias=AliasChoices(
            "rules_dir",
            AliasPath("rules", "rules_dir"),
        ),
        description="Directory containing Kazumi-format JSON rule files.",
    )

    # Outbound HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Per-request timeout in seconds for rule searches.",
    )
    http_follow_redirects: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "http_follow_redirects",
            AliasPath("http", "follow_redirects"),
        ),
        description="Whether HTTP client follows redirects.",
    )
    http_verify_tls: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "http_verify_tls",
            AliasPath("http", "verify_tls"),
        ),
        description="Verify TLS certificates (several sources have broken ones).",
    )
    http_user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )
    http_accept_language: str = Field(
        default=DEFAULT_ACCEPT_LANGUAGE,
        validation_alias=AliasChoices(
            "http_accept_language",
            AliasPath("http", "accept_language"),
        ),
        description="Accept-Language header for outgoing HTTP requests.",
    )

    # Search (YAML section: search.*)
    search_max_episode_items: int = Field(
        default=5,
        validation_alias=AliasChoices(
            "search_max_episode_items",
            AliasPath("search", "max_episode_items"),
        ),
        description="Leading results per rule that get their episodes fetched.",
    )
    search_channel_capacity: int = Field(
        default=100,
        validation_alias=AliasChoices(
            "search_channel_capacity",
            AliasPath("search", "channel_capacity"),
        ),
        description="Bound of the per-search event queue.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    @field_validator("rules_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Path:
        return _normalize_path(v)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("search_max_episode_items")
    @classmethod
    def _validate_max_episode_items(cls, v: int) -> int:
        if v < 0:
            raise ValueError("search_max_episode_items must be >= 0")
        return v

    @field_validator("search_channel_capacity")
    @classmethod
    def _validate_channel_capacity(cls, v: int) -> int:
        if v < 1:
            raise ValueError("search_channel_capacity must be >= 1")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "rules": {"rules_dir": str(self.rules_dir)},
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "follow_redirects": self.http_follow_redirects,
                "verify_tls": self.http_verify_tls,
                "user_agent": self.http_user_agent,
                "accept_language": self.http_accept_language,
            },
            "search": {
                "max_episode_items": self.search_max_episode_items,
                "channel_capacity": self.search_channel_capacity,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    load.py creates EnvOverrides() to read ANIMESEARCH_* variables,
    converts to dict of set values, merges into YAML/defaults,
    then validates AppConfig.

    Supported env var examples (flat, explicit):
    - ANIMESEARCH_RULES_DIR
    - ANIMESEARCH_HTTP_TIMEOUT_SECONDS
    - ANIMESEARCH_HTTP_VERIFY_TLS
    - ANIMESEARCH_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="ANIMESEARCH_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    rules_dir: Optional[Path] = None

    http_timeout_seconds: Optional[float] = None
    http_follow_redirects: Optional[bool] = None
    http_verify_tls: Optional[bool] = None
    http_user_agent: Optional[str] = None
    http_accept_language: Optional[str] = None

    search_max_episode_items: Optional[int] = None
    search_channel_capacity: Optional[int] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    @field_validator("rules_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Any:
        if v is None:
            return None
        return _normalize_path(v)

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
