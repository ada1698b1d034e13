"""Data models for the Relationship Store."""

from dataclasses import dataclass, field


@dataclass
class TicketNode:
    """Everything known about one ticket's relationships.

    Attributes:
        number: Human-facing issue number (store key).
        id: Stable node ID from the tracker.
        title: Issue title.
        state: Issue state (e.g. "OPEN", "CLOSED").
        parent_number: Hierarchical parent, if any.
        sub_issue_numbers: Hierarchical children.
        blocking_numbers: Tickets this ticket blocks.
        blocked_by_numbers: Tickets that block this ticket.
    """

    number: int
    id: str = ""
    title: str = ""
    state: str = ""
    parent_number: int | None = None
    sub_issue_numbers: list[int] = field(default_factory=list)
    blocking_numbers: list[int] = field(default_factory=list)
    blocked_by_numbers: list[int] = field(default_factory=list)

    @property
    def dependency_numbers(self) -> list[int]:
        """Blocking and blocked-by numbers, in that order."""
        return [*self.blocking_numbers, *self.blocked_by_numbers]
