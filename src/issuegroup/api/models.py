"""Pydantic models for REST API."""

from dataclasses import asdict
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


class TicketResponse(BaseModel):
    """An issue's identity and display fields."""

    id: str
    number: int
    title: str
    state: str = ""


# Group detection models


class GroupMemberResponse(BaseModel):
    """A group member with its implementation position."""

    id: str
    number: int
    title: str
    state: str
    order: int


class GroupPrimaryResponse(BaseModel):
    """The group's primary ticket."""

    id: str
    number: int
    title: str


class GroupResponse(BaseModel):
    """Response model for group detection."""

    members: list[GroupMemberResponse]
    primary: GroupPrimaryResponse
    is_group: bool
    total_tickets: int


# Relationship models


class SubIssueSummaryResponse(BaseModel):
    """Completion summary of a parent's sub-issues."""

    total: int
    completed: int
    percent_completed: int


class SubIssueListResponse(BaseModel):
    """Response model for a parent's sub-issues."""

    parent: TicketResponse
    sub_issues: list[TicketResponse]
    summary: SubIssueSummaryResponse
    has_more: bool


class DependencyListResponse(BaseModel):
    """Response model for an issue's dependencies."""

    ticket: TicketResponse
    blocking: list[TicketResponse]
    blocked_by: list[TicketResponse]
    total_blocking: int
    total_blocked_by: int


class SubIssueCreate(BaseModel):
    """Request model for adding a sub-issue."""

    child_number: int = Field(..., ge=1)
    replace_parent: bool = False


class DependencyChange(BaseModel):
    """Request model for adding or removing a blocker."""

    blocking_number: int = Field(..., ge=1)


class RelationshipChangeResponse(BaseModel):
    """Response model for a changed relationship."""

    source: TicketResponse
    target: TicketResponse


def dataclass_to_response(model: type[BaseModel], value: Any) -> Any:
    """Convert a dataclass result into its response model."""
    return model.model_validate(asdict(value))
