"""GitHub repository metadata collector."""

from __future__ import annotations

from datetime import UTC, datetime
from types import TracebackType
from typing import Any

import httpx
import structlog

from gitcollect.collectors.base import CollectorType, DataCollector

logger = structlog.get_logger(__name__)


class RemoteMetadataError(Exception):
    """Repository metadata could not be fetched or has not been collected."""

    pass


class GitHubCollector(DataCollector):
    """Reads a repository's metadata from the GitHub REST API.

    ``collect`` takes the full repository name, e.g. ``"JCTools/JCTools"``.
    Getters forward to the fetched payload. Requests are made once each;
    failures raise RemoteMetadataError.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        api_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        from gitcollect.config import settings

        if client is None:
            headers = {"Accept": "application/vnd.github+json"}
            token = token or settings.github.token
            if token:
                headers["Authorization"] = f"Bearer {token}"
            client = httpx.Client(
                base_url=api_url or settings.github.api_url,
                headers=headers,
                timeout=timeout or settings.github.timeout,
                transport=transport,
            )

        self._client = client
        self._full_name: str | None = None
        self._repository: dict[str, Any] | None = None

    @property
    def type(self) -> CollectorType:
        return CollectorType.GITHUB

    def collect(self, identifier: str) -> dict[str, Any]:
        """Fetch metadata for the repository named ``owner/name``."""
        full_name = identifier.strip().strip("/")
        if full_name.count("/") != 1:
            raise RemoteMetadataError(
                f"Expected a repository name like 'owner/name', got {identifier!r}"
            )

        self._repository = self._get_json(f"/repos/{full_name}")
        self._full_name = full_name
        logger.info("connected", url=self._repository.get("git_url"))
        return self._repository

    # Payload getters

    def forks(self) -> int:
        return self._field("forks_count")

    def stargazers_count(self) -> int:
        return self._field("stargazers_count")

    def login(self) -> str:
        return self._field("owner")["login"]

    def owner_name(self) -> str:
        return self._field("owner")["login"]

    def created_at(self) -> int:
        """Creation time in seconds since epoch."""
        return _epoch_seconds(self._field("created_at"))

    def updated_at(self) -> int:
        """Last update time in seconds since epoch."""
        return _epoch_seconds(self._field("updated_at"))

    def language(self) -> str | None:
        return self._field("language")

    def full_name(self) -> str:
        return self._field("full_name")

    def homepage(self) -> str | None:
        return self._field("homepage")

    def name(self) -> str:
        return self._field("name")

    def description(self) -> str | None:
        return self._field("description")

    def html_url(self) -> str:
        return self._field("html_url")

    def size(self) -> int:
        return self._field("size")

    def url(self) -> str:
        return self._field("url")

    def is_fork(self) -> bool:
        return bool(self._field("fork"))

    def repository_id(self) -> int:
        return self._field("id")

    def open_issue_count(self) -> int:
        return self._field("open_issues_count")

    def subscribers_count(self) -> int:
        return self._field("subscribers_count")

    def watchers_count(self) -> int:
        return self._field("watchers_count")

    def parent_repository_id(self) -> int | None:
        """ID of the repository this one was forked from, if any."""
        parent = self._payload().get("parent")
        return parent["id"] if parent else None

    # Secondary requests

    def languages(self) -> dict[str, int]:
        """Bytes of code per language."""
        return self._get_json(f"/repos/{self._name()}/languages")

    def collaborator_names(self) -> set[str]:
        """Logins of all collaborators (requires an authenticated token)."""
        names: set[str] = set()
        url: str | None = f"/repos/{self._name()}/collaborators"
        while url:
            response = self._request(url)
            names.update(user["login"] for user in response.json())
            url = response.links.get("next", {}).get("url")
        return names

    # Internals

    def _payload(self) -> dict[str, Any]:
        if self._repository is None:
            raise RemoteMetadataError("No repository collected yet")
        return self._repository

    def _field(self, key: str) -> Any:
        try:
            return self._payload()[key]
        except KeyError as e:
            raise RemoteMetadataError(f"Field {key!r} missing from payload") from e

    def _name(self) -> str:
        if self._full_name is None:
            raise RemoteMetadataError("No repository collected yet")
        return self._full_name

    def _get_json(self, url: str) -> Any:
        return self._request(url).json()

    def _request(self, url: str) -> httpx.Response:
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "github_request_failed",
                url=url,
                status_code=e.response.status_code,
            )
            raise RemoteMetadataError(
                f"GitHub returned {e.response.status_code} for {url}"
            ) from e
        except httpx.HTTPError as e:
            logger.error("github_request_failed", url=url, error=str(e))
            raise RemoteMetadataError(f"Request to {url} failed: {e}") from e
        return response

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> GitHubCollector:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def _epoch_seconds(timestamp: str) -> int:
    dt = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp())
