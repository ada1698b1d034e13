"""Integration tests for the assembled FastAPI application."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from issuegroup.api import create_app
from issuegroup.api.dependencies import get_tracker_factory
from issuegroup.config import Settings

pytestmark = pytest.mark.integration

ISSUES = {
    100: {},
    101: {"parent": 100},
    102: {"parent": 100, "blocked_by": [101]},
    103: {"parent": 100, "blocked_by": [102]},
    200: {"blocking": [101]},
}


@pytest.fixture
def tracker(make_tracker):
    return make_tracker(ISSUES, scope="acme/widgets")


def _client(settings: Settings, tracker) -> Iterator[TestClient]:
    app = create_app(settings)
    app.dependency_overrides[get_tracker_factory] = lambda: lambda repo: tracker
    with TestClient(app) as client:
        yield client


@pytest.fixture
def client(tracker) -> Iterator[TestClient]:
    """App with default repo configured; lifespan runs on enter."""
    yield from _client(Settings(github_token="tok", owner="acme", repo="widgets"), tracker)


@pytest.fixture
def unconfigured_client(tracker) -> Iterator[TestClient]:
    """App without a default repo."""
    yield from _client(Settings(github_token="tok"), tracker)


class TestAssembledApp:
    """End-to-end detection through the HTTP surface."""

    def test_health(self, client: TestClient) -> None:
        assert client.get("/health").json() == {"status": "ok"}

    def test_group_via_path_repo(self, client: TestClient) -> None:
        response = client.get("/api/v1/repos/acme/widgets/issues/100/group")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [m["number"] for m in data["members"]] == [200, 101, 102, 103]
        assert data["primary"]["number"] == 200
        assert data["total_tickets"] == 4

    def test_group_via_default_repo(self, client: TestClient) -> None:
        response = client.get("/api/v1/issues/102/group")

        assert response.status_code == 200
        assert response.json()["data"]["total_tickets"] == 4

    def test_default_repo_missing(self, unconfigured_client: TestClient) -> None:
        response = unconfigured_client.get("/api/v1/issues/102/group")

        assert response.status_code == 500
        assert "GITHUB_OWNER" in response.json()["error"]

    def test_unknown_seed(self, client: TestClient) -> None:
        response = client.get("/api/v1/repos/acme/widgets/issues/9/group")

        assert response.status_code == 404
        assert response.json()["error"] == "Issue #9 not found in acme/widgets"
