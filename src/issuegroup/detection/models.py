"""Data models for group detection results."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class GroupMember:
    """A ticket in the group with its 1-based implementation position."""

    id: str
    number: int
    title: str
    state: str
    order: int


@dataclass
class GroupPrimary:
    """The representative ticket of a group."""

    id: str
    number: int
    title: str


@dataclass
class GroupResult:
    """Outcome of group detection.

    Attributes:
        members: Tickets in implementation order (blockers first).
        primary: First ticket in order, or the seed if nothing resolved.
        is_group: Whether more than one ticket belongs to the group.
        total_tickets: Number of members.
    """

    primary: GroupPrimary
    members: list[GroupMember] = field(default_factory=list)
    is_group: bool = False
    total_tickets: int = 0

    @property
    def numbers(self) -> list[int]:
        """Member numbers in order."""
        return [member.number for member in self.members]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
