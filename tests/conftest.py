"""Shared pytest fixtures and configuration."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from issuegroup.tracker import (
    LinkedTicket,
    ParentTicket,
    RelationshipSnapshot,
    TicketNotFoundError,
    TicketRef,
    TrackerError,
)


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: requests against the live GitHub API")


class FakeTracker:
    """In-memory relationship source built from a small issue table.

    ``issues`` maps issue number to a dict with optional keys ``parent``,
    ``blocked_by`` and ``blocking``. Children are derived from ``parent``.
    Dependency edges are mirrored to the other side unless ``one_sided``.
    Numbers referenced but missing from the table raise TicketNotFoundError;
    numbers in ``failing`` raise a generic TrackerError.
    """

    def __init__(
        self,
        issues: dict[int, dict[str, Any]],
        scope: str = "owner/repo",
        failing: set[int] | None = None,
        one_sided: bool = False,
    ) -> None:
        self.issues = issues
        self.scope = scope
        self.failing = failing or set()
        self.one_sided = one_sided
        self.calls: list[tuple[int, bool]] = []
        self.closed = False

    def _ref(self, number: int) -> TicketRef:
        state = self.issues.get(number, {}).get("state", "OPEN")
        return TicketRef(id=f"I_{number}", number=number, title=f"Issue {number}", state=state)

    def _children(self, number: int) -> list[int]:
        return sorted(n for n, entry in self.issues.items() if entry.get("parent") == number)

    def _blocking(self, number: int) -> list[int]:
        numbers = set(self.issues.get(number, {}).get("blocking", []))
        if not self.one_sided:
            numbers.update(
                n for n, entry in self.issues.items() if number in entry.get("blocked_by", [])
            )
        return sorted(numbers)

    def _blocked_by(self, number: int) -> list[int]:
        numbers = set(self.issues.get(number, {}).get("blocked_by", []))
        if not self.one_sided:
            numbers.update(
                n for n, entry in self.issues.items() if number in entry.get("blocking", [])
            )
        return sorted(numbers)

    def _linked(self, number: int, with_dependencies: bool) -> LinkedTicket:
        ref = self._ref(number)
        return LinkedTicket(
            id=ref.id,
            number=ref.number,
            title=ref.title,
            state=ref.state,
            blocking_numbers=self._blocking(number) if with_dependencies else [],
            blocked_by_numbers=self._blocked_by(number) if with_dependencies else [],
        )

    def fetch_relationships(self, number: int, *, wide: bool = False) -> RelationshipSnapshot:
        self.calls.append((number, wide))
        if number in self.failing:
            raise TrackerError(f"Access denied to #{number}")
        if number not in self.issues:
            raise TicketNotFoundError(number, self.scope)

        parent = None
        parent_number = self.issues[number].get("parent")
        if parent_number is not None:
            ref = self._ref(parent_number)
            parent = ParentTicket(
                id=ref.id,
                number=ref.number,
                title=ref.title,
                state=ref.state,
                sub_issues=[self._linked(n, True) for n in self._children(parent_number)]
                if wide
                else [],
            )

        return RelationshipSnapshot(
            ticket=self._ref(number),
            parent=parent,
            sub_issues=[self._linked(n, wide) for n in self._children(number)],
            blocking=[self._ref(n) for n in self._blocking(number)],
            blocked_by=[self._ref(n) for n in self._blocked_by(number)],
        )

    @property
    def fetched(self) -> list[int]:
        return [number for number, _ in self.calls]

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_tracker() -> Callable[..., FakeTracker]:
    """Build a FakeTracker from an issue table."""
    return FakeTracker
