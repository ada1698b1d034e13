"""Data models for the issue tracker adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass
class TicketRef:
    """Identity and display fields of an issue."""

    id: str
    number: int
    title: str = ""
    state: str = ""


@dataclass
class LinkedTicket(TicketRef):
    """An issue seen through a relationship, with its dependency numbers."""

    blocking_numbers: list[int] = field(default_factory=list)
    blocked_by_numbers: list[int] = field(default_factory=list)


@dataclass
class ParentTicket(TicketRef):
    """A hierarchical parent with its declared sub-issues."""

    sub_issues: list[LinkedTicket] = field(default_factory=list)


@dataclass
class RelationshipSnapshot:
    """Everything one fetch reveals about an issue's relationships.

    Attributes:
        ticket: The fetched issue itself.
        parent: Its parent (with siblings on a wide fetch), if any.
        sub_issues: Its own children.
        blocking: Issues it blocks.
        blocked_by: Issues that block it.
    """

    ticket: TicketRef
    parent: ParentTicket | None = None
    sub_issues: list[LinkedTicket] = field(default_factory=list)
    blocking: list[TicketRef] = field(default_factory=list)
    blocked_by: list[TicketRef] = field(default_factory=list)


@dataclass
class SubIssueSummary:
    """Completion summary for a parent's sub-issues."""

    total: int
    completed: int
    percent_completed: int


@dataclass
class SubIssueList:
    """Sub-issues of a parent issue."""

    parent: TicketRef
    sub_issues: list[TicketRef]
    summary: SubIssueSummary
    has_more: bool = False


@dataclass
class DependencyList:
    """Direct dependencies of an issue."""

    ticket: TicketRef
    blocking: list[TicketRef]
    blocked_by: list[TicketRef]
    total_blocking: int = 0
    total_blocked_by: int = 0


@dataclass
class RelationshipChange:
    """Result of adding or removing a relationship.

    For sub-issues ``source`` is the parent and ``target`` the child; for
    dependencies ``source`` is the blocked issue and ``target`` the blocker.
    """

    source: TicketRef
    target: TicketRef


class RelationshipSource(Protocol):
    """Interface for anything that can report an issue's relationships."""

    @property
    def scope(self) -> str:
        """Human-readable scope, e.g. "owner/repo"."""
        ...

    def fetch_relationships(self, number: int, *, wide: bool = False) -> RelationshipSnapshot:
        """Fetch the relationship snapshot for an issue.

        Raises TicketNotFoundError if the issue cannot be resolved.
        """
        ...
