"""Topological ordering of group members by blocking relationships."""

from __future__ import annotations

import heapq
from typing import TYPE_CHECKING

from issuegroup.detection.exceptions import DependencyCycleError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from issuegroup.relationships import RelationshipStore


def blocking_edges(store: RelationshipStore, members: Iterable[int]) -> set[tuple[int, int]]:
    """Collect (blocker, blocked) pairs where both ends are members.

    An edge counts when either side reports it, so one-sided data from a
    partial fetch still orders the pair.
    """
    group = set(members)
    edges: set[tuple[int, int]] = set()
    for number in group:
        node = store.get(number)
        if node is None:
            continue
        for blocker in node.blocked_by_numbers:
            if blocker in group:
                edges.add((blocker, number))
        for blocked in node.blocking_numbers:
            if blocked in group:
                edges.add((number, blocked))
    return edges


def topological_sort(store: RelationshipStore, members: Iterable[int]) -> list[int]:
    """Order members so every ticket comes after the members blocking it.

    Kahn's algorithm with the ready set kept as a min-heap, so ties always
    resolve to the smallest issue number.

    Edges come from blocking_edges, the union of both directions. A
    stricter reading takes in-degree only from blocked_by_numbers and
    decrements only through blocking_numbers. The two agree whenever both
    sides report the edge. With one-sided data the union still orders the
    pair, where the stricter rule would either drop the edge or report a
    false cycle.

    Args:
        store: Relationship store holding the members.
        members: Member issue numbers.

    Returns:
        Issue numbers in implementation order.

    Raises:
        DependencyCycleError: If some members block each other in a cycle.
    """
    group = set(members)
    in_degree = dict.fromkeys(group, 0)
    dependents: dict[int, list[int]] = {number: [] for number in group}

    for blocker, blocked in sorted(blocking_edges(store, group)):
        in_degree[blocked] += 1
        dependents[blocker].append(blocked)

    ready = [number for number, degree in in_degree.items() if degree == 0]
    heapq.heapify(ready)

    ordered: list[int] = []
    while ready:
        current = heapq.heappop(ready)
        ordered.append(current)
        for blocked in dependents[current]:
            in_degree[blocked] -= 1
            if in_degree[blocked] == 0:
                heapq.heappush(ready, blocked)

    if len(ordered) != len(group):
        raise DependencyCycleError(group.difference(ordered))

    return ordered
