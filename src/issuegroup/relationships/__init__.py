"""Relationship Store - Merged relationship data for discovered tickets."""

from issuegroup.relationships.models import TicketNode
from issuegroup.relationships.store import RelationshipStore

__all__ = [
    "RelationshipStore",
    "TicketNode",
]
