"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from .defaults import DEFAULT_USER_AGENTS

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]
UserAgentMode = Literal["per_process", "per_call", "fixed"]

_HTTPS_PREFIX = "https://"


def normalize_base_domain(value: str) -> str:
    """Strip a leading ``https://`` (any case) and trailing slashes.

    The host itself keeps the casing it was entered with.
    """
    domain = value.strip()
    if domain.lower().startswith(_HTTPS_PREFIX):
        domain = domain[len(_HTTPS_PREFIX) :]
    return domain.rstrip("/")


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


class SiteSettings(BaseModel):
    """User-facing site and player settings.

    Passed explicitly into the fetcher/resolver on every call; the base
    domain may be changed at runtime through the settings endpoint.
    """

    model_config = ConfigDict(validate_assignment=True)

    base_domain: str = Field(
        default="streamingcommunity.computer",
        description="Host of the streaming site, without scheme.",
    )
    patch_stream: bool = Field(
        default=False,
        description="Append h=1 to the assembled playlist URL.",
    )
    hold_speed: float = Field(
        default=0.5,
        ge=0.25,
        le=2.0,
        description="Playback rate while the player is held down.",
    )
    show_original_title: bool = Field(default=False)
    show_cast: bool = Field(default=True)
    show_director: bool = Field(default=True)
    force_landscape: bool = Field(default=False)

    @field_validator("base_domain", mode="before")
    @classmethod
    def _normalize_domain(cls, v: Any) -> str:
        if not isinstance(v, str):
            raise TypeError(f"base_domain must be a string, got: {type(v)!r}")
        domain = normalize_base_domain(v)
        if not domain:
            raise ValueError("base_domain must not be empty")
        return domain


class CacheConfig(BaseModel):
    """Diskcache configuration."""

    model_config = ConfigDict(populate_by_name=True)

    directory: Path = Field(
        default=Path("./.cache/streamscout"),
        alias="dir",
        description="Diskcache SQLite DB path",
    )
    max_concurrent: int = Field(
        default=10,
        description="Max parallel cache ops (semaphore limit)",
    )

    @field_validator("directory", mode="before")
    @classmethod
    def _validate_dir(cls, v: Any) -> Path:
        return _normalize_path(v)


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/logging/cache/site/progress/search_history).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="streamscout", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=30.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="HTTP timeout in seconds for page fetches.",
    )
    http_follow_redirects: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "http_follow_redirects",
            AliasPath("http", "follow_redirects"),
        ),
    )
    http_user_agent_mode: UserAgentMode = Field(
        default="per_process",
        validation_alias=AliasChoices(
            "http_user_agent_mode",
            AliasPath("http", "user_agent_mode"),
        ),
        description=(
            "per_process: one agent picked from the pool at startup; "
            "per_call: a fresh pick per request; fixed: always http_user_agent."
        ),
    )
    http_user_agents: list[str] = Field(
        default_factory=lambda: list(DEFAULT_USER_AGENTS),
        validation_alias=AliasChoices(
            "http_user_agents",
            AliasPath("http", "user_agents"),
        ),
        description="User-Agent pool for outgoing page fetches.",
    )
    http_user_agent: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent used when http_user_agent_mode is 'fixed'.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
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

    cache: CacheConfig = Field(default_factory=CacheConfig)

    site: SiteSettings = Field(default_factory=SiteSettings)

    # Playback progress retention (YAML section: progress.*)
    progress_ttl_days: int = Field(
        default=0,
        validation_alias=AliasChoices(
            "progress_ttl_days",
            AliasPath("progress", "ttl_days"),
        ),
        description="Days a progress record survives without updates. 0 = never expire.",
    )

    # Search history (YAML section: search_history.*)
    search_history_max_entries: int = Field(
        default=0,
        validation_alias=AliasChoices(
            "search_history_max_entries",
            AliasPath("search_history", "max_entries"),
        ),
        description="Cap on stored queries, oldest evicted first. 0 = no cap.",
    )

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("http_user_agents")
    @classmethod
    def _validate_user_agents(cls, v: list[str]) -> list[str]:
        agents = [ua.strip() for ua in v if ua and ua.strip()]
        if not agents:
            raise ValueError("http_user_agents must contain at least one agent")
        return agents

    @field_validator("progress_ttl_days", "search_history_max_entries")
    @classmethod
    def _validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("value must be >= 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        if self.http_user_agent_mode == "fixed" and not self.http_user_agent:
            self.http_user_agent = self.http_user_agents[0]
        return self

    @property
    def progress_ttl_seconds(self) -> int:
        return self.progress_ttl_days * 86_400

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "follow_redirects": self.http_follow_redirects,
                "user_agent_mode": self.http_user_agent_mode,
                "user_agents": list(self.http_user_agents),
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "cache": {
                "dir": str(self.cache.directory),
                "max_concurrent": self.cache.max_concurrent,
            },
            "site": self.site.model_dump(),
            "progress": {"ttl_days": self.progress_ttl_days},
            "search_history": {"max_entries": self.search_history_max_entries},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    load.py creates EnvOverrides() to read STREAMSCOUT_* variables,
    converts them to a dict of set values and merges that over YAML/defaults
    before AppConfig is validated.

    Supported env var examples (flat, explicit):
    - STREAMSCOUT_BASE_DOMAIN
    - STREAMSCOUT_PATCH_STREAM
    - STREAMSCOUT_HTTP_TIMEOUT_SECONDS
    - STREAMSCOUT_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="STREAMSCOUT_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_follow_redirects: Optional[bool] = None
    http_user_agent_mode: Optional[UserAgentMode] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    cache_dir: Optional[Path] = None

    base_domain: Optional[str] = None
    patch_stream: Optional[bool] = None

    progress_ttl_days: Optional[int] = None
    search_history_max_entries: Optional[int] = None

    @field_validator("cache_dir", mode="before")
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
