"""gitcollect configuration module.

All settings support environment variable overrides with the GITCOLLECT_
prefix; nested sections use a double underscore, for example
``GITCOLLECT_COLLECTOR__REVISION=main``.

Usage:
    from gitcollect.config import settings

    settings.collector.revision
    settings.paths.repository_path("JCTools")
    settings.github.api_url
"""

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "Settings",
    "CollectorSettings",
    "PathSettings",
    "GitHubSettings",
    "LoggingSettings",
    "settings",
]

LOG_FORMATS = ("console", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CollectorSettings(BaseSettings):
    """Configuration for git history collection."""

    model_config = SettingsConfigDict(env_prefix="GITCOLLECT_COLLECTOR__")

    revision: str = Field(
        default="HEAD",
        description="Revision the commit walk starts from",
    )
    detect_copies: bool = Field(
        default=False,
        description="Report copied files as COPY (renames are always detected)",
    )


class PathSettings(BaseSettings):
    """Configuration for where local repositories live."""

    model_config = SettingsConfigDict(env_prefix="GITCOLLECT_PATHS__")

    repositories_dir: Path = Field(
        default_factory=lambda: Path.cwd() / "repositories",
        description="Directory holding previously cloned repositories",
    )

    def repository_path(self, name: str) -> Path:
        """Resolve a repository by its folder name under repositories_dir."""
        return self.repositories_dir / name


class GitHubSettings(BaseSettings):
    """Configuration for the GitHub metadata collector."""

    model_config = SettingsConfigDict(env_prefix="GITCOLLECT_GITHUB__")

    api_url: str = Field(
        default="https://api.github.com",
        description="Base URL of the GitHub REST API",
    )
    token: str | None = Field(
        default=None,
        description="Personal access token; anonymous access when unset",
    )
    timeout: float = Field(
        default=10.0,
        description="Timeout in seconds for each API request",
    )


class LoggingSettings(BaseSettings):
    """Configuration for structlog output."""

    model_config = SettingsConfigDict(env_prefix="GITCOLLECT_LOGGING__")

    level: str = Field(default="INFO", description="Log level name")
    format: str = Field(
        default="console",
        description='Output format: "console" or "json"',
    )


class Settings(BaseSettings):
    """Root settings class composing all configuration sections.

    Use the module-level `settings` singleton for convenience.
    """

    model_config = SettingsConfigDict(env_prefix="GITCOLLECT_")

    collector: CollectorSettings = Field(default_factory=CollectorSettings)
    paths: PathSettings = Field(default_factory=PathSettings)
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def model_post_init(self, context: Any) -> None:
        """Validate settings after initialization."""
        if self.logging.level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"logging level must be one of {LOG_LEVELS}, "
                f"got {self.logging.level!r}"
            )
        if self.logging.format not in LOG_FORMATS:
            raise ValueError(
                f"logging format must be one of {LOG_FORMATS}, "
                f"got {self.logging.format!r}"
            )
        if self.github.timeout <= 0:
            raise ValueError(
                f"github timeout must be positive, got {self.github.timeout}"
            )


# Module-level singleton instance
settings = Settings()
