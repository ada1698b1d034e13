"""RelationshipStore - Per-detection table of discovered tickets."""

from __future__ import annotations

from typing import TYPE_CHECKING

from issuegroup.relationships.models import TicketNode

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


_SET_FIELDS = ("sub_issue_numbers", "blocking_numbers", "blocked_by_numbers")
_SCALAR_FIELDS = ("id", "title", "state")


class RelationshipStore:
    """In-memory mapping from issue number to the richest known TicketNode.

    A store lives for exactly one detection call. Observations of the same
    ticket are merged, never overwritten: the more complete relationship
    list wins, a known parent is never forgotten and display fields are
    filled once.
    """

    def __init__(self) -> None:
        self._nodes: dict[int, TicketNode] = {}

    def __contains__(self, number: object) -> bool:
        return number in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[TicketNode]:
        return iter(self._nodes.values())

    def get(self, number: int) -> TicketNode | None:
        """Get the stored node for an issue number, if any."""
        return self._nodes.get(number)

    def numbers(self) -> list[int]:
        """All stored issue numbers in ascending order."""
        return sorted(self._nodes)

    def upsert(self, node: TicketNode) -> TicketNode:
        """Insert a node or merge it into the existing one.

        Args:
            node: Observation to record. The store keeps its own copy.

        Returns:
            The stored (possibly merged) node.
        """
        existing = self._nodes.get(node.number)
        if existing is None:
            stored = TicketNode(
                number=node.number,
                id=node.id,
                title=node.title,
                state=node.state,
                parent_number=node.parent_number,
                sub_issue_numbers=list(node.sub_issue_numbers),
                blocking_numbers=list(node.blocking_numbers),
                blocked_by_numbers=list(node.blocked_by_numbers),
            )
            self._nodes[node.number] = stored
            return stored

        _merge(existing, node)
        return existing

    def discard(self, number: int) -> None:
        """Forget a ticket that turned out not to be resolvable."""
        self._nodes.pop(number, None)

    def upsert_all(self, nodes: Iterable[TicketNode]) -> None:
        """Upsert a batch of observations."""
        for node in nodes:
            self.upsert(node)


def _merge(existing: TicketNode, incoming: TicketNode) -> None:
    """Merge an observation into a stored node in place."""
    for name in _SET_FIELDS:
        incoming_numbers = getattr(incoming, name)
        if len(incoming_numbers) > len(getattr(existing, name)):
            setattr(existing, name, list(incoming_numbers))

    if existing.parent_number is None and incoming.parent_number is not None:
        existing.parent_number = incoming.parent_number

    for name in _SCALAR_FIELDS:
        value = getattr(incoming, name)
        if value and not getattr(existing, name):
            setattr(existing, name, value)
