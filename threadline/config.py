"""Application configuration."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HackerNewsSettings(BaseModel):
    """Item source configuration (Hacker News Firebase API)."""

    base_url: str = "https://hacker-news.firebaseio.com/v0/"
    timeout: float = 10.0

    # Upper bound on concurrent connections held by the shared client
    max_connections: int = 50


class HighlightSettings(BaseModel):
    """Optional highlight metadata lookup.

    When url_template is unset, no highlights are fetched.
    The template receives the story id, e.g. "https://example.com/{story_id}.json".
    """

    url_template: str | None = None
    timeout: float = 5.0


class TreeSettings(BaseModel):
    """Comment tree materialization limits."""

    # Nodes at this depth or deeper are not expanded unless forced or required
    max_depth: int = Field(default=5, ge=0)

    # Number of top-level comments materialized per "load more"
    page_size: int = Field(default=5, ge=1)

    # Length of the parent snippet shown as context in recency mode
    snippet_length: int = Field(default=60, ge=1)

    # Hop limit when walking parent pointers to the story
    max_chain_hops: int = Field(default=100, ge=1)


class SessionSettings(BaseModel):
    """Open thread session limits."""

    # Oldest session is closed when a new one would exceed this
    max_sessions: int = Field(default=100, ge=1)


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, using "__" for nested values:

        ENVIRONMENT=production
        TREE__MAX_DEPTH=8
        TREE__PAGE_SIZE=10
        HACKERNEWS__TIMEOUT=5
        HIGHLIGHTS__URL_TEMPLATE=https://example.com/highlights/{story_id}.json
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    host: str = "localhost"
    port: int = 8000

    hackernews: HackerNewsSettings = HackerNewsSettings()
    highlights: HighlightSettings = HighlightSettings()
    tree: TreeSettings = TreeSettings()
    sessions: SessionSettings = SessionSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
