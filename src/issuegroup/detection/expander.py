"""ClosureExpander - Grows a RelationshipStore to the transitive closure of a seed."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from issuegroup.detection.exceptions import SeedNotFoundError
from issuegroup.relationships import RelationshipStore, TicketNode
from issuegroup.tracker import TicketNotFoundError, TrackerError

if TYPE_CHECKING:
    from issuegroup.tracker import RelationshipSnapshot, RelationshipSource, TicketRef

logger = logging.getLogger(__name__)


def _bare_node(ref: TicketRef) -> TicketNode:
    """Node for an issue seen only as someone else's dependency."""
    return TicketNode(number=ref.number, id=ref.id, title=ref.title, state=ref.state)


def snapshot_node(snapshot: RelationshipSnapshot) -> TicketNode:
    """Node for the fetched issue itself."""
    ticket = snapshot.ticket
    return TicketNode(
        number=ticket.number,
        id=ticket.id,
        title=ticket.title,
        state=ticket.state,
        parent_number=snapshot.parent.number if snapshot.parent else None,
        sub_issue_numbers=[sub.number for sub in snapshot.sub_issues],
        blocking_numbers=[ref.number for ref in snapshot.blocking],
        blocked_by_numbers=[ref.number for ref in snapshot.blocked_by],
    )


class ClosureExpander:
    """Discovers every ticket reachable from a seed.

    The seed is fetched wide (parent, siblings, children, direct
    dependencies). Dependency targets that have not been fetched with their
    own edges are then fetched one at a time from a FIFO frontier until
    nothing new turns up.
    """

    def __init__(self, source: RelationshipSource) -> None:
        """Initialize the expander.

        Args:
            source: Where relationship snapshots come from.
        """
        self.source = source

    def expand(self, seed_number: int) -> RelationshipStore:
        """Build the closed RelationshipStore for a seed.

        Args:
            seed_number: Issue number to start from.

        Returns:
            A fresh store holding every discovered ticket.

        Raises:
            SeedNotFoundError: If the seed itself cannot be fetched.
        """
        store = RelationshipStore()
        # Numbers whose own dependency lists have been observed
        resolved: set[int] = set()
        # Numbers that were fetched, or failed to fetch
        attempted: set[int] = set()
        frontier: deque[int] = deque()
        queued: set[int] = set()

        try:
            seed = self.source.fetch_relationships(seed_number, wide=True)
        except TicketNotFoundError as e:
            raise SeedNotFoundError(seed_number, self.source.scope) from e
        attempted.add(seed_number)

        self._record_seed(store, seed, resolved)

        def enqueue(numbers: list[int]) -> None:
            for number in numbers:
                if number in resolved or number in attempted or number in queued:
                    continue
                frontier.append(number)
                queued.add(number)

        for node in store:
            enqueue(node.dependency_numbers)

        while frontier:
            number = frontier.popleft()
            queued.discard(number)
            if number in resolved or number in attempted:
                continue
            attempted.add(number)

            try:
                snapshot = self.source.fetch_relationships(number)
            except TrackerError as e:
                logger.warning("Could not fetch issue #%d, skipping: %s", number, e)
                store.discard(number)
                continue

            node = store.upsert(snapshot_node(snapshot))
            resolved.add(number)
            enqueue(node.dependency_numbers)

        logger.info(
            "Expanded #%d: %d issue(s) discovered, %d fetch(es) attempted",
            seed_number,
            len(store),
            len(attempted),
        )
        return store

    @staticmethod
    def _record_seed(
        store: RelationshipStore, seed: RelationshipSnapshot, resolved: set[int]
    ) -> None:
        """Upsert everything the wide seed fetch revealed."""
        store.upsert(snapshot_node(seed))
        resolved.add(seed.ticket.number)

        parent = seed.parent
        if parent is not None:
            store.upsert(
                TicketNode(
                    number=parent.number,
                    id=parent.id,
                    title=parent.title,
                    state=parent.state,
                    sub_issue_numbers=[sub.number for sub in parent.sub_issues],
                )
            )
            for sibling in parent.sub_issues:
                store.upsert(
                    TicketNode(
                        number=sibling.number,
                        id=sibling.id,
                        title=sibling.title,
                        state=sibling.state,
                        parent_number=parent.number,
                        blocking_numbers=list(sibling.blocking_numbers),
                        blocked_by_numbers=list(sibling.blocked_by_numbers),
                    )
                )
                resolved.add(sibling.number)

        for child in seed.sub_issues:
            store.upsert(
                TicketNode(
                    number=child.number,
                    id=child.id,
                    title=child.title,
                    state=child.state,
                    parent_number=seed.ticket.number,
                    blocking_numbers=list(child.blocking_numbers),
                    blocked_by_numbers=list(child.blocked_by_numbers),
                )
            )
            resolved.add(child.number)

        for ref in (*seed.blocking, *seed.blocked_by):
            store.upsert(_bare_node(ref))
