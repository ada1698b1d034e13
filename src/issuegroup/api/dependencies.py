"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Annotated, Protocol

from fastapi import Depends

from issuegroup.config import Settings
from issuegroup.tracker import (
    DependencyList,
    RelationshipChange,
    RelationshipSnapshot,
    SubIssueList,
)


class IssueTracker(Protocol):
    """Interface for the tracker adapter used by routes."""

    @property
    def scope(self) -> str:
        """Human-readable scope, e.g. "owner/repo"."""
        ...

    def fetch_relationships(self, number: int, *, wide: bool = False) -> RelationshipSnapshot:
        """Fetch the relationship snapshot for an issue."""
        ...

    def list_sub_issues(self, number: int) -> SubIssueList:
        """List sub-issues of a parent."""
        ...

    def add_sub_issue(
        self, parent_number: int, child_number: int, replace_parent: bool = ...
    ) -> RelationshipChange:
        """Add a sub-issue to a parent."""
        ...

    def list_dependencies(self, number: int) -> DependencyList:
        """List blocking and blocked-by issues."""
        ...

    def add_dependency(self, blocked_number: int, blocking_number: int) -> RelationshipChange:
        """Add a blocking edge."""
        ...

    def remove_dependency(self, blocked_number: int, blocking_number: int) -> RelationshipChange:
        """Remove a blocking edge."""
        ...

    def close(self) -> None:
        """Release transport resources."""
        ...


TrackerFactory = Callable[[str], IssueTracker]

# Global settings and tracker factory (initialized on app startup)
_settings: Settings | None = None
_tracker_factory: TrackerFactory | None = None


def init_tracker_factory(settings: Settings) -> TrackerFactory:
    """Initialize the global factory that builds a tracker per repo."""
    from issuegroup.tracker import GitHubIssueAdapter  # noqa: PLC0415

    global _settings, _tracker_factory  # noqa: PLW0603
    _settings = settings

    def factory(repo: str) -> IssueTracker:
        return GitHubIssueAdapter(
            repo=repo,
            token=settings.require_token(),
            base_url=settings.graphql_url,
        )

    _tracker_factory = factory
    return _tracker_factory


def close_tracker_factory() -> None:
    """Drop the global tracker factory."""
    global _settings, _tracker_factory  # noqa: PLW0603
    _settings = None
    _tracker_factory = None


def get_tracker_factory() -> TrackerFactory:
    """Dependency that provides the tracker factory."""
    if _tracker_factory is None:
        raise RuntimeError("Tracker factory not initialized. Call init_tracker_factory() first.")
    return _tracker_factory


def get_tracker(
    owner: str, repo: str, factory: Annotated[TrackerFactory, Depends(get_tracker_factory)]
) -> Generator[IssueTracker, None, None]:
    """Dependency that provides a tracker for the requested repo and closes it afterwards."""
    tracker = factory(f"{owner}/{repo}")
    try:
        yield tracker
    finally:
        tracker.close()


# Type alias for dependency injection
TrackerDep = Annotated[IssueTracker, Depends(get_tracker)]


def get_settings() -> Settings:
    """Dependency that provides the application settings."""
    if _settings is None:
        raise RuntimeError("Settings not initialized. Call init_tracker_factory() first.")
    return _settings


def get_default_tracker(
    settings: Annotated[Settings, Depends(get_settings)],
    factory: Annotated[TrackerFactory, Depends(get_tracker_factory)],
) -> Generator[IssueTracker, None, None]:
    """Dependency that provides a tracker for GITHUB_OWNER/GITHUB_REPO."""
    tracker = factory(settings.resolve_repo())
    try:
        yield tracker
    finally:
        tracker.close()


DefaultTrackerDep = Annotated[IssueTracker, Depends(get_default_tracker)]
