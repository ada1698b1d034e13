"""Unit tests for the group membership filter."""

import pytest

from issuegroup.detection import filter_group_members
from issuegroup.relationships import RelationshipStore, TicketNode


def _store(*nodes: TicketNode) -> RelationshipStore:
    store = RelationshipStore()
    store.upsert_all(nodes)
    return store


@pytest.mark.unit
class TestInitialMembers:
    """Tests for the hierarchy-based starting set."""

    def test_siblings_of_sub_issue(self) -> None:
        """A seed with a parent groups with its siblings, not the parent."""
        store = _store(
            TicketNode(number=10, sub_issue_numbers=[1, 2, 3]),
            TicketNode(number=1, parent_number=10),
            TicketNode(number=2, parent_number=10),
            TicketNode(number=3, parent_number=10),
        )

        assert filter_group_members(store, 2) == [1, 2, 3]

    def test_seed_kept_when_parent_list_incomplete(self) -> None:
        """The seed is a member even if the parent's list misses it."""
        store = _store(
            TicketNode(number=10, sub_issue_numbers=[2]),
            TicketNode(number=1, parent_number=10),
            TicketNode(number=2, parent_number=10),
        )

        assert filter_group_members(store, 1) == [1, 2]

    def test_unresolved_siblings_skipped(self) -> None:
        """Declared children missing from the store are not members."""
        store = _store(
            TicketNode(number=10, sub_issue_numbers=[1, 2]),
            TicketNode(number=1, parent_number=10),
        )

        assert filter_group_members(store, 1) == [1]

    def test_parent_missing_from_store(self) -> None:
        """Without parent data the seed stands alone."""
        store = _store(TicketNode(number=1, parent_number=10))

        assert filter_group_members(store, 1) == [1]

    def test_container_seed_excluded(self) -> None:
        """A seed with children is replaced by its children."""
        store = _store(
            TicketNode(number=10, sub_issue_numbers=[1, 2]),
            TicketNode(number=1, parent_number=10),
            TicketNode(number=2, parent_number=10),
        )

        assert filter_group_members(store, 10) == [1, 2]

    def test_container_without_resolvable_children(self) -> None:
        """A container with no resolvable children degenerates to itself."""
        store = _store(TicketNode(number=10, sub_issue_numbers=[1, 2]))

        assert filter_group_members(store, 10) == [10]

    def test_standalone_seed(self) -> None:
        """No parent and no children: the seed alone."""
        store = _store(TicketNode(number=5))

        assert filter_group_members(store, 5) == [5]

    def test_seed_missing_from_store(self) -> None:
        """An unknown seed is returned as its own group."""
        assert filter_group_members(RelationshipStore(), 5) == [5]


@pytest.mark.unit
class TestDependencyExpansion:
    """Tests for growing the group along blocking edges."""

    def test_transitive_dependencies_join(self) -> None:
        """Blockers of blockers join the group."""
        store = _store(
            TicketNode(number=1, blocked_by_numbers=[2]),
            TicketNode(number=2, blocking_numbers=[1], blocked_by_numbers=[3]),
            TicketNode(number=3, blocking_numbers=[2]),
        )

        assert filter_group_members(store, 1) == [1, 2, 3]

    def test_blocked_tickets_join(self) -> None:
        """Tickets blocked by a member also join."""
        store = _store(
            TicketNode(number=1, blocking_numbers=[4]),
            TicketNode(number=4, blocked_by_numbers=[1]),
        )

        assert filter_group_members(store, 1) == [1, 4]

    def test_unknown_dependencies_ignored(self) -> None:
        """Dependencies that never made it into the store are not members."""
        store = _store(TicketNode(number=1, blocked_by_numbers=[99]))

        assert filter_group_members(store, 1) == [1]

    def test_sibling_dependency_outside_parent(self) -> None:
        """A sibling's blocker from elsewhere joins the group."""
        store = _store(
            TicketNode(number=10, sub_issue_numbers=[1, 2]),
            TicketNode(number=1, parent_number=10),
            TicketNode(number=2, parent_number=10, blocked_by_numbers=[20]),
            TicketNode(number=20, parent_number=30, blocking_numbers=[2]),
        )

        assert filter_group_members(store, 1) == [1, 2, 20]

    def test_parent_of_member_not_pulled_in(self) -> None:
        """A dependency edge to a member's parent is ignored."""
        store = _store(
            TicketNode(number=10, sub_issue_numbers=[1, 2], blocking_numbers=[2]),
            TicketNode(number=1, parent_number=10),
            TicketNode(number=2, parent_number=10, blocked_by_numbers=[10]),
        )

        assert filter_group_members(store, 1) == [1, 2]

    def test_result_sorted(self) -> None:
        """Members come back in ascending order."""
        store = _store(
            TicketNode(number=9, blocked_by_numbers=[3]),
            TicketNode(number=3, blocking_numbers=[9], blocked_by_numbers=[6]),
            TicketNode(number=6, blocking_numbers=[3]),
        )

        assert filter_group_members(store, 9) == [3, 6, 9]
