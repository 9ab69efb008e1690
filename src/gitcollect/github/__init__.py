"""GitHub repository metadata."""

from .collector import GitHubCollector, RemoteMetadataError

__all__ = ["GitHubCollector", "RemoteMetadataError"]
