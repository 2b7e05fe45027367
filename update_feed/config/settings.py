from pydantic_settings import BaseSettings, SettingsConfigDict

from update_feed.config.sources import DEFAULT_SOURCES, RepoSource


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # GitHub - token is optional; unauthenticated requests get a lower rate limit
    github_token: str = ""

    # Repositories to pull history from
    # Env format (JSON): [{"owner": "org", "name": "repo", "tag": "web"}]
    update_sources: list[RepoSource] = list(DEFAULT_SOURCES)

    # History retrieval - GitHub caps per_page at 100
    commits_page_size: int = 100

    # Commit cache lifetime in milliseconds (default: 5 minutes)
    updates_cache_ttl_ms: int = 300_000

    # Default number of commits per source for the recent window
    recent_updates_count: int = 200

    # Number of updates revealed per "load more"
    feed_page_size: int = 15

    # IANA zone used for the date/time shown on each update
    feed_timezone: str = "UTC"

    # Cache snapshot file; empty string = cache lives in memory only
    cache_snapshot_path: str = ""

    @property
    def snapshot_enabled(self) -> bool:
        """Check if the commit cache should be persisted between restarts."""
        return bool(self.cache_snapshot_path)


settings = Settings()
