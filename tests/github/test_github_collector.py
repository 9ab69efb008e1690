"""Tests for GitHubCollector using a mocked transport."""

from datetime import UTC, datetime

import httpx
import pytest

from gitcollect.collectors import CollectorType
from gitcollect.github import GitHubCollector, RemoteMetadataError

REPOSITORY = {
    "id": 1296269,
    "name": "JCTools",
    "full_name": "JCTools/JCTools",
    "owner": {"login": "JCTools", "id": 1},
    "description": "Java Concurrency Tools for the JVM",
    "homepage": "https://jctools.github.io/JCTools/",
    "html_url": "https://github.com/JCTools/JCTools",
    "url": "https://api.github.com/repos/JCTools/JCTools",
    "git_url": "git://github.com/JCTools/JCTools.git",
    "language": "Java",
    "fork": False,
    "forks_count": 520,
    "stargazers_count": 3400,
    "watchers_count": 3400,
    "subscribers_count": 150,
    "open_issues_count": 12,
    "size": 9000,
    "created_at": "2013-03-04T17:30:00Z",
    "updated_at": "2024-01-02T03:04:05Z",
}

FORK = {
    **REPOSITORY,
    "id": 42,
    "full_name": "someone/JCTools",
    "fork": True,
    "parent": {"id": 1296269, "full_name": "JCTools/JCTools"},
}


def make_collector(handler) -> GitHubCollector:
    client = httpx.Client(
        base_url="https://api.github.com",
        transport=httpx.MockTransport(handler),
    )
    return GitHubCollector(client=client)


def api(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/repos/JCTools/JCTools":
        return httpx.Response(200, json=REPOSITORY)
    if path == "/repos/someone/JCTools":
        return httpx.Response(200, json=FORK)
    if path == "/repos/JCTools/JCTools/languages":
        return httpx.Response(200, json={"Java": 1_200_000, "Shell": 800})
    if path == "/repos/JCTools/JCTools/collaborators":
        if request.url.params.get("page") == "2":
            return httpx.Response(200, json=[{"login": "carol"}])
        return httpx.Response(
            200,
            json=[{"login": "alice"}, {"login": "bob"}],
            headers={
                "Link": (
                    "<https://api.github.com/repos/JCTools/JCTools/collaborators"
                    '?page=2>; rel="next"'
                )
            },
        )
    return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def collector():
    with make_collector(api) as collector:
        yield collector


class TestCollect:
    def test_collect_returns_payload(self, collector):
        payload = collector.collect("JCTools/JCTools")

        assert payload["full_name"] == "JCTools/JCTools"

    def test_strips_slashes(self, collector):
        collector.collect("/JCTools/JCTools/")

        assert collector.full_name() == "JCTools/JCTools"

    @pytest.mark.parametrize("identifier", ["JCTools", "a/b/c", ""])
    def test_rejects_malformed_name(self, collector, identifier):
        with pytest.raises(RemoteMetadataError, match="owner/name"):
            collector.collect(identifier)

    def test_not_found(self, collector):
        with pytest.raises(RemoteMetadataError, match="404"):
            collector.collect("nobody/nothing")

    def test_transport_error(self):
        def unreachable(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with make_collector(unreachable) as collector:
            with pytest.raises(RemoteMetadataError, match="failed"):
                collector.collect("JCTools/JCTools")

    def test_getters_before_collect(self, collector):
        with pytest.raises(RemoteMetadataError, match="No repository collected"):
            collector.forks()
        with pytest.raises(RemoteMetadataError, match="No repository collected"):
            collector.languages()

    def test_type(self, collector):
        assert collector.type is CollectorType.GITHUB
        assert str(collector) == "GitHubCollector"


class TestGetters:
    @pytest.fixture(autouse=True)
    def _collected(self, collector):
        collector.collect("JCTools/JCTools")

    def test_counts(self, collector):
        assert collector.forks() == 520
        assert collector.stargazers_count() == 3400
        assert collector.watchers_count() == 3400
        assert collector.subscribers_count() == 150
        assert collector.open_issue_count() == 12
        assert collector.size() == 9000

    def test_identity(self, collector):
        assert collector.name() == "JCTools"
        assert collector.full_name() == "JCTools/JCTools"
        assert collector.login() == "JCTools"
        assert collector.owner_name() == "JCTools"
        assert collector.repository_id() == 1296269
        assert collector.language() == "Java"
        assert collector.description() == "Java Concurrency Tools for the JVM"

    def test_urls(self, collector):
        assert collector.homepage() == "https://jctools.github.io/JCTools/"
        assert collector.html_url() == "https://github.com/JCTools/JCTools"
        assert collector.url() == "https://api.github.com/repos/JCTools/JCTools"

    def test_timestamps_are_epoch_seconds(self, collector):
        expected = int(datetime(2013, 3, 4, 17, 30, tzinfo=UTC).timestamp())

        assert collector.created_at() == expected
        assert collector.updated_at() == int(
            datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC).timestamp()
        )

    def test_not_a_fork(self, collector):
        assert collector.is_fork() is False
        assert collector.parent_repository_id() is None

    def test_languages(self, collector):
        assert collector.languages() == {"Java": 1_200_000, "Shell": 800}

    def test_collaborators_follow_pagination(self, collector):
        assert collector.collaborator_names() == {"alice", "bob", "carol"}


def test_fork_parent(collector):
    collector.collect("someone/JCTools")

    assert collector.is_fork() is True
    assert collector.parent_repository_id() == 1296269


def test_missing_field():
    def sparse(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"full_name": "a/b"})

    with make_collector(sparse) as collector:
        collector.collect("a/b")

        with pytest.raises(RemoteMetadataError, match="forks_count"):
            collector.forks()


def test_default_client_requests_configured_api():
    requests: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=REPOSITORY)

    with GitHubCollector(
        token="secret-token", transport=httpx.MockTransport(record)
    ) as collector:
        collector.collect("JCTools/JCTools")

    assert [str(r.url) for r in requests] == [
        "https://api.github.com/repos/JCTools/JCTools"
    ]
    assert requests[0].headers["Authorization"] == "Bearer secret-token"
    assert requests[0].headers["Accept"] == "application/vnd.github+json"
