"""Tests for the configuration module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest


class TestDefaultSettings:
    """Test default configuration values."""

    def test_collector_revision(self) -> None:
        from gitcollect.config import settings

        assert settings.collector.revision == "HEAD"

    def test_collector_detect_copies(self) -> None:
        from gitcollect.config import settings

        assert settings.collector.detect_copies is False

    def test_github_defaults(self) -> None:
        from gitcollect.config import settings

        assert settings.github.api_url == "https://api.github.com"
        assert settings.github.timeout == 10.0

    def test_logging_defaults(self) -> None:
        from gitcollect.config import settings

        assert settings.logging.level == "INFO"
        assert settings.logging.format == "console"

    def test_repository_path(self) -> None:
        from gitcollect.config import PathSettings

        paths = PathSettings(repositories_dir=Path("/srv/repositories"))

        assert paths.repository_path("JCTools") == Path("/srv/repositories/JCTools")


class TestEnvironmentOverrides:
    """Test environment variable overrides."""

    def test_revision_override(self) -> None:
        with patch.dict(os.environ, {"GITCOLLECT_COLLECTOR__REVISION": "main"}):
            from gitcollect.config import Settings

            assert Settings().collector.revision == "main"

    def test_detect_copies_override(self) -> None:
        with patch.dict(os.environ, {"GITCOLLECT_COLLECTOR__DETECT_COPIES": "true"}):
            from gitcollect.config import Settings

            assert Settings().collector.detect_copies is True

    def test_repositories_dir_override(self) -> None:
        with patch.dict(
            os.environ, {"GITCOLLECT_PATHS__REPOSITORIES_DIR": "/data/repos"}
        ):
            from gitcollect.config import Settings

            assert Settings().paths.repositories_dir == Path("/data/repos")

    def test_github_token_override(self) -> None:
        with patch.dict(os.environ, {"GITCOLLECT_GITHUB__TOKEN": "abc123"}):
            from gitcollect.config import Settings

            assert Settings().github.token == "abc123"

    def test_log_format_override(self) -> None:
        with patch.dict(os.environ, {"GITCOLLECT_LOGGING__FORMAT": "json"}):
            from gitcollect.config import Settings

            assert Settings().logging.format == "json"


class TestValidation:
    """Test settings validation."""

    def test_invalid_log_format(self) -> None:
        with patch.dict(os.environ, {"GITCOLLECT_LOGGING__FORMAT": "xml"}):
            from gitcollect.config import Settings

            with pytest.raises(ValueError, match="logging format must be one of"):
                Settings()

    def test_invalid_log_level(self) -> None:
        with patch.dict(os.environ, {"GITCOLLECT_LOGGING__LEVEL": "chatty"}):
            from gitcollect.config import Settings

            with pytest.raises(ValueError, match="logging level must be one of"):
                Settings()

    def test_log_level_is_case_insensitive(self) -> None:
        with patch.dict(os.environ, {"GITCOLLECT_LOGGING__LEVEL": "debug"}):
            from gitcollect.config import Settings

            assert Settings().logging.level == "debug"

    def test_non_positive_timeout(self) -> None:
        with patch.dict(os.environ, {"GITCOLLECT_GITHUB__TIMEOUT": "0"}):
            from gitcollect.config import Settings

            with pytest.raises(ValueError, match="github timeout must be positive"):
                Settings()

    def test_collector_uses_configured_revision(self) -> None:
        from gitcollect.config import settings
        from gitcollect.git import GitCollector

        with patch.object(settings.collector, "revision", "develop"):
            assert GitCollector().revision == "develop"
