"""Membership filter - Picks the implementation group out of a closed store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from issuegroup.relationships import RelationshipStore

logger = logging.getLogger(__name__)


def _initial_members(store: RelationshipStore, seed_number: int) -> set[int]:
    seed = store.get(seed_number)
    if seed is None:
        return {seed_number}

    members: set[int] = set()
    if seed.parent_number is not None:
        # Sub-issue: the group is the seed and its siblings
        parent = store.get(seed.parent_number)
        if parent is not None:
            members.update(n for n in parent.sub_issue_numbers if n in store)
        members.add(seed_number)
    elif seed.sub_issue_numbers:
        # Container: the group is its children, not the seed
        members.update(n for n in seed.sub_issue_numbers if n in store)
        if not members:
            members.add(seed_number)
    else:
        members.add(seed_number)
    return members


def _is_parent_of_member(store: RelationshipStore, members: set[int], candidate: int) -> bool:
    for number in members:
        node = store.get(number)
        if node is not None and node.parent_number == candidate:
            return True
    return False


def filter_group_members(store: RelationshipStore, seed_number: int) -> list[int]:
    """Determine which stored tickets belong to the implementation group.

    Members are the seed's siblings (when it has a parent), its children
    (when it is a container), or the seed alone, extended with every stored
    ticket connected to a member through blocking edges. Tickets that are
    the parent of a member are never pulled in through a dependency edge.

    Args:
        store: Closed relationship store.
        seed_number: The seed issue number.

    Returns:
        Member numbers in ascending order.
    """
    members = _initial_members(store, seed_number)

    changed = True
    while changed:
        changed = False
        for number in sorted(members):
            node = store.get(number)
            if node is None:
                continue
            for dep in node.dependency_numbers:
                if dep in members or dep not in store:
                    continue
                if _is_parent_of_member(store, members, dep):
                    logger.debug("Not adding #%d: parent of a group member", dep)
                    continue
                members.add(dep)
                changed = True

    logger.debug("Group for #%d: %s", seed_number, sorted(members))
    return sorted(members)
