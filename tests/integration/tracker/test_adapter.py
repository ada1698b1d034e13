"""Integration tests for GitHubIssueAdapter.

These tests require:
- GITHUB_TOKEN environment variable
- GITHUB_TEST_REPO environment variable (e.g., "owner/test-repo")
- GITHUB_TEST_ISSUE environment variable (an existing issue number)

Run with: pytest tests/integration/tracker/ -m real
"""

import os
from collections.abc import Iterator

import pytest

from issuegroup.detection import detect_group
from issuegroup.tracker import GitHubIssueAdapter, TicketNotFoundError

# Skip all tests in this module if credentials not available
pytestmark = [
    pytest.mark.integration,
    pytest.mark.real,
    pytest.mark.skipif(
        not os.environ.get("GITHUB_TOKEN")
        or not os.environ.get("GITHUB_TEST_REPO")
        or not os.environ.get("GITHUB_TEST_ISSUE"),
        reason="GITHUB_TOKEN, GITHUB_TEST_REPO, and GITHUB_TEST_ISSUE required",
    ),
]


@pytest.fixture
def issue_number() -> int:
    """Get test issue number from environment."""
    return int(os.environ["GITHUB_TEST_ISSUE"])


@pytest.fixture
def adapter() -> Iterator[GitHubIssueAdapter]:
    """Create a GitHubIssueAdapter for the test repo."""
    adapter = GitHubIssueAdapter(
        repo=os.environ["GITHUB_TEST_REPO"],
        token=os.environ["GITHUB_TOKEN"],
    )
    yield adapter
    adapter.close()


class TestLiveRelationships:
    """Read-only checks against a real repository."""

    def test_fetch_wide_snapshot(self, adapter: GitHubIssueAdapter, issue_number: int) -> None:
        snapshot = adapter.fetch_relationships(issue_number, wide=True)

        assert snapshot.ticket.number == issue_number
        assert snapshot.ticket.id

    def test_list_dependencies(self, adapter: GitHubIssueAdapter, issue_number: int) -> None:
        result = adapter.list_dependencies(issue_number)

        assert result.total_blocking >= len(result.blocking)

    def test_detect_group(self, adapter: GitHubIssueAdapter, issue_number: int) -> None:
        result = detect_group(adapter, issue_number)

        assert result.total_tickets == len(result.members) >= 1
        assert [m.order for m in result.members] == list(range(1, result.total_tickets + 1))

    def test_missing_issue(self, adapter: GitHubIssueAdapter) -> None:
        with pytest.raises(TicketNotFoundError):
            adapter.fetch_relationships(99_999_999)
