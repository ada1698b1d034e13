"""Issue tracker adapter - Reads and edits issue relationships on GitHub."""

from issuegroup.tracker.adapter import GitHubIssueAdapter
from issuegroup.tracker.exceptions import TicketNotFoundError, TrackerError
from issuegroup.tracker.models import (
    DependencyList,
    LinkedTicket,
    ParentTicket,
    RelationshipChange,
    RelationshipSnapshot,
    RelationshipSource,
    SubIssueList,
    SubIssueSummary,
    TicketRef,
)

__all__ = [
    "DependencyList",
    "GitHubIssueAdapter",
    "LinkedTicket",
    "ParentTicket",
    "RelationshipChange",
    "RelationshipSnapshot",
    "RelationshipSource",
    "SubIssueList",
    "SubIssueSummary",
    "TicketNotFoundError",
    "TicketRef",
    "TrackerError",
]
