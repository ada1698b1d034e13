"""GroupDetector - Finds and orders the tickets implemented as one unit."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from issuegroup.detection.exceptions import SeedNotFoundError
from issuegroup.detection.expander import ClosureExpander
from issuegroup.detection.membership import filter_group_members
from issuegroup.detection.models import GroupMember, GroupPrimary, GroupResult
from issuegroup.detection.ordering import topological_sort

if TYPE_CHECKING:
    from issuegroup.relationships import RelationshipStore
    from issuegroup.tracker import RelationshipSource

logger = logging.getLogger(__name__)


class GroupDetector:
    """Detects implementation groups from a relationship source.

    Detection runs in three steps:
    - Expand the seed to the transitive closure of its relationships
    - Keep only implementation members (drop container parents)
    - Order members so blockers come first
    """

    def __init__(self, source: RelationshipSource) -> None:
        """Initialize the GroupDetector.

        Args:
            source: Relationship source to fetch snapshots from.
        """
        self.source = source
        self.expander = ClosureExpander(source)

    def detect(self, seed_number: int) -> GroupResult:
        """Detect the group containing a seed issue.

        Args:
            seed_number: Issue number to start from.

        Returns:
            GroupResult with members in implementation order.

        Raises:
            SeedNotFoundError: If the seed issue cannot be fetched.
            DependencyCycleError: If group members block each other in a cycle.
        """
        logger.info("Detecting group for #%d in %s", seed_number, self.source.scope)
        store = self.expander.expand(seed_number)
        members = filter_group_members(store, seed_number)
        ordered = topological_sort(store, members)
        result = build_result(store, ordered, seed_number, self.source.scope)
        logger.info(
            "Group for #%d: %d ticket(s), primary #%d",
            seed_number,
            result.total_tickets,
            result.primary.number,
        )
        return result


def build_result(
    store: RelationshipStore, ordered: list[int], seed_number: int, scope: str
) -> GroupResult:
    """Assemble a GroupResult from ordered member numbers."""
    members = []
    for position, number in enumerate(ordered, start=1):
        node = store.get(number)
        if node is None:
            continue
        members.append(
            GroupMember(
                id=node.id,
                number=node.number,
                title=node.title,
                state=node.state,
                order=position,
            )
        )

    if members:
        first = members[0]
        primary = GroupPrimary(id=first.id, number=first.number, title=first.title)
    else:
        seed = store.get(seed_number)
        if seed is None:
            raise SeedNotFoundError(seed_number, scope)
        primary = GroupPrimary(id=seed.id, number=seed.number, title=seed.title)

    return GroupResult(
        primary=primary,
        members=members,
        is_group=len(members) > 1,
        total_tickets=len(members),
    )


def detect_group(source: RelationshipSource, seed_number: int) -> GroupResult:
    """Detect the group containing ``seed_number`` using ``source``."""
    return GroupDetector(source).detect(seed_number)
