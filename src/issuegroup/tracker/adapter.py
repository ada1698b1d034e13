"""GitHubIssueAdapter - Reads and edits issue relationships via GitHub GraphQL."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from issuegroup.logging import sanitize_for_log
from issuegroup.tracker.exceptions import TicketNotFoundError, TrackerError
from issuegroup.tracker.models import (
    DependencyList,
    LinkedTicket,
    ParentTicket,
    RelationshipChange,
    RelationshipSnapshot,
    SubIssueList,
    SubIssueSummary,
    TicketRef,
)

logger = logging.getLogger(__name__)

# Wide fetch: parent with siblings, children, and direct dependencies
WIDE_RELATIONSHIPS_QUERY = """
query($owner: String!, $repo: String!, $number: Int!) {
    repository(owner: $owner, name: $repo) {
        issue(number: $number) {
            id
            number
            title
            state
            parent {
                id
                number
                title
                state
                subIssues(first: 50) {
                    nodes {
                        id
                        number
                        title
                        state
                        blocking(first: 20) { nodes { number } }
                        blockedBy(first: 20) { nodes { number } }
                    }
                }
            }
            subIssues(first: 50) {
                nodes {
                    id
                    number
                    title
                    state
                    blocking(first: 20) { nodes { number } }
                    blockedBy(first: 20) { nodes { number } }
                }
            }
            blocking(first: 20) {
                nodes { id number title state }
            }
            blockedBy(first: 20) {
                nodes { id number title state }
            }
        }
    }
}
"""

# Narrow fetch: the issue's own edges only
NARROW_RELATIONSHIPS_QUERY = """
query($owner: String!, $repo: String!, $number: Int!) {
    repository(owner: $owner, name: $repo) {
        issue(number: $number) {
            id
            number
            title
            state
            parent { id number title state }
            subIssues(first: 50) {
                nodes { id number title state }
            }
            blocking(first: 20) {
                nodes { id number title state }
            }
            blockedBy(first: 20) {
                nodes { id number title state }
            }
        }
    }
}
"""


def _numbers(connection: dict[str, Any] | None) -> list[int]:
    """Extract issue numbers from a GraphQL connection."""
    if not connection:
        return []
    return [int(node["number"]) for node in connection.get("nodes") or []]


def _ref(node: dict[str, Any]) -> TicketRef:
    return TicketRef(
        id=node.get("id") or "",
        number=int(node["number"]),
        title=node.get("title") or "",
        state=node.get("state") or "",
    )


def _refs(connection: dict[str, Any] | None) -> list[TicketRef]:
    if not connection:
        return []
    return [_ref(node) for node in connection.get("nodes") or []]


def _linked(node: dict[str, Any]) -> LinkedTicket:
    return LinkedTicket(
        id=node.get("id") or "",
        number=int(node["number"]),
        title=node.get("title") or "",
        state=node.get("state") or "",
        blocking_numbers=_numbers(node.get("blocking")),
        blocked_by_numbers=_numbers(node.get("blockedBy")),
    )


def _linked_list(connection: dict[str, Any] | None) -> list[LinkedTicket]:
    if not connection:
        return []
    return [_linked(node) for node in connection.get("nodes") or []]


def _mutation_result(data: dict[str, Any], name: str) -> dict[str, Any]:
    """Extract a mutation payload, which GitHub nulls when a target is missing."""
    result: dict[str, Any] | None = data.get(name)
    if not result:
        raise TrackerError(f"Mutation {name} returned no result")
    return result


class GitHubIssueAdapter:
    """Adapter for GitHub issue relationships (sub-issues and dependencies).

    Uses GitHub GraphQL API. Satisfies the RelationshipSource interface used
    by group detection.
    """

    def __init__(
        self,
        repo: str,
        token: str,
        base_url: str = "https://api.github.com/graphql",
    ) -> None:
        """Initialize the adapter.

        Args:
            repo: GitHub repo in "owner/repo" format
            token: GitHub personal access token with repo scope
            base_url: GitHub GraphQL API URL (for testing/enterprise)
        """
        self.repo = repo
        self.owner, self.repo_name = repo.split("/")
        self.token = token
        self.base_url = base_url
        self._client: httpx.Client | None = None
        self._node_ids: dict[int, str] = {}  # issue number -> node ID

    @property
    def scope(self) -> str:
        """Human-readable scope used in error messages."""
        return self.repo

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for GraphQL API."""
        if self._client is None:
            self._client = httpx.Client(
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Content-Type": "application/json",
                },
                timeout=30.0,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> GitHubIssueAdapter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a GraphQL query.

        NOT_FOUND errors are left for the caller to interpret from the
        (partial) data, since GitHub reports a missing issue that way.

        Args:
            query: GraphQL query string
            variables: Query variables

        Returns:
            Response data

        Raises:
            TrackerError: If the request or query fails
        """
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            response = self.client.post(self.base_url, json=payload)
        except httpx.HTTPError as e:
            raise TrackerError(f"GraphQL request failed: {sanitize_for_log(str(e))}") from e

        if response.status_code != 200:
            raise TrackerError(
                f"GraphQL request failed: {response.status_code} - "
                f"{sanitize_for_log(response.text)}"
            )

        try:
            data: dict[str, Any] = response.json()
        except ValueError as e:
            raise TrackerError(
                f"Invalid GraphQL response: {sanitize_for_log(response.text)}"
            ) from e

        errors = data.get("errors") or []
        if any(error.get("type") != "NOT_FOUND" for error in errors):
            raise TrackerError(f"GraphQL errors: {sanitize_for_log(str(errors))}")

        return dict(data.get("data") or {})

    def _fetch_issue(self, query: str, number: int) -> dict[str, Any]:
        """Fetch a single issue node, raising if it does not exist."""
        data = self._graphql(
            query,
            {"owner": self.owner, "repo": self.repo_name, "number": number},
        )
        issue: dict[str, Any] | None = (data.get("repository") or {}).get("issue")
        if not issue:
            raise TicketNotFoundError(number, self.scope)
        if issue.get("id"):
            self._node_ids[number] = issue["id"]
        return issue

    def fetch_relationships(self, number: int, *, wide: bool = False) -> RelationshipSnapshot:
        """Fetch an issue with its hierarchy and dependency edges.

        Args:
            number: GitHub issue number
            wide: Also fetch the parent's sub-issues and every child's
                dependency numbers

        Returns:
            RelationshipSnapshot for the issue

        Raises:
            TicketNotFoundError: If the issue doesn't exist in this repo
        """
        query = WIDE_RELATIONSHIPS_QUERY if wide else NARROW_RELATIONSHIPS_QUERY
        logger.debug("Fetching %s relationships for #%d", "wide" if wide else "narrow", number)
        issue = self._fetch_issue(query, number)

        parent = None
        parent_node = issue.get("parent")
        if parent_node:
            parent = ParentTicket(
                id=parent_node.get("id") or "",
                number=int(parent_node["number"]),
                title=parent_node.get("title") or "",
                state=parent_node.get("state") or "",
                sub_issues=_linked_list(parent_node.get("subIssues")),
            )

        return RelationshipSnapshot(
            ticket=_ref(issue),
            parent=parent,
            sub_issues=_linked_list(issue.get("subIssues")),
            blocking=_refs(issue.get("blocking")),
            blocked_by=_refs(issue.get("blockedBy")),
        )

    def resolve_node_id(self, number: int) -> str:
        """Resolve an issue number to its GraphQL node ID (cached).

        Raises:
            TicketNotFoundError: If the issue doesn't exist in this repo
        """
        cached = self._node_ids.get(number)
        if cached:
            return cached

        query = """
        query($owner: String!, $repo: String!, $number: Int!) {
            repository(owner: $owner, name: $repo) {
                issue(number: $number) { id }
            }
        }
        """
        issue = self._fetch_issue(query, number)
        return str(issue["id"])

    def list_sub_issues(self, number: int) -> SubIssueList:
        """List sub-issues of a parent issue with a completion summary.

        Args:
            number: Parent issue number

        Returns:
            SubIssueList for the parent

        Raises:
            TicketNotFoundError: If the issue doesn't exist
        """
        query = """
        query($owner: String!, $repo: String!, $number: Int!) {
            repository(owner: $owner, name: $repo) {
                issue(number: $number) {
                    id
                    number
                    title
                    state
                    subIssuesSummary { total completed percentCompleted }
                    subIssues(first: 50) {
                        nodes { id number title state }
                        pageInfo { hasNextPage endCursor }
                    }
                }
            }
        }
        """
        issue = self._fetch_issue(query, number)
        sub_issues = _refs(issue.get("subIssues"))

        summary_node = issue.get("subIssuesSummary")
        if summary_node:
            summary = SubIssueSummary(
                total=summary_node["total"],
                completed=summary_node["completed"],
                percent_completed=summary_node["percentCompleted"],
            )
        else:
            completed = sum(1 for sub in sub_issues if sub.state == "CLOSED")
            percent = round(completed / len(sub_issues) * 100) if sub_issues else 0
            summary = SubIssueSummary(
                total=len(sub_issues), completed=completed, percent_completed=percent
            )

        page_info = (issue.get("subIssues") or {}).get("pageInfo") or {}
        return SubIssueList(
            parent=_ref(issue),
            sub_issues=sub_issues,
            summary=summary,
            has_more=bool(page_info.get("hasNextPage")),
        )

    def list_dependencies(self, number: int) -> DependencyList:
        """List the issues an issue blocks and is blocked by.

        Raises:
            TicketNotFoundError: If the issue doesn't exist
        """
        query = """
        query($owner: String!, $repo: String!, $number: Int!) {
            repository(owner: $owner, name: $repo) {
                issue(number: $number) {
                    id
                    number
                    title
                    state
                    blocking(first: 50) {
                        nodes { id number title state }
                        totalCount
                    }
                    blockedBy(first: 50) {
                        nodes { id number title state }
                        totalCount
                    }
                }
            }
        }
        """
        issue = self._fetch_issue(query, number)
        blocking = issue.get("blocking") or {}
        blocked_by = issue.get("blockedBy") or {}
        return DependencyList(
            ticket=_ref(issue),
            blocking=_refs(blocking),
            blocked_by=_refs(blocked_by),
            total_blocking=blocking.get("totalCount", 0),
            total_blocked_by=blocked_by.get("totalCount", 0),
        )

    def add_sub_issue(
        self, parent_number: int, child_number: int, replace_parent: bool = False
    ) -> RelationshipChange:
        """Make one issue a sub-issue of another.

        Args:
            parent_number: Parent issue number
            child_number: Issue that becomes the sub-issue
            replace_parent: Move the child even if it already has a parent

        Returns:
            RelationshipChange with parent as source and child as target
        """
        logger.info("Adding #%d as sub-issue of #%d", child_number, parent_number)
        parent_id = self.resolve_node_id(parent_number)
        child_id = self.resolve_node_id(child_number)

        mutation = """
        mutation($parentId: ID!, $childId: ID!, $replaceParent: Boolean) {
            addSubIssue(input: {
                issueId: $parentId,
                subIssueId: $childId,
                replaceParent: $replaceParent
            }) {
                issue { id number title state }
                subIssue { id number title state }
            }
        }
        """
        data = self._graphql(
            mutation,
            {"parentId": parent_id, "childId": child_id, "replaceParent": replace_parent},
        )
        result = _mutation_result(data, "addSubIssue")
        return RelationshipChange(source=_ref(result["issue"]), target=_ref(result["subIssue"]))

    def add_dependency(self, blocked_number: int, blocking_number: int) -> RelationshipChange:
        """Record that ``blocking_number`` blocks ``blocked_number``.

        Returns:
            RelationshipChange with the blocked issue as source
        """
        logger.info("Adding dependency: #%d blocks #%d", blocking_number, blocked_number)
        return self._change_dependency("addBlockedBy", blocked_number, blocking_number)

    def remove_dependency(self, blocked_number: int, blocking_number: int) -> RelationshipChange:
        """Remove the blocking edge from ``blocking_number`` to ``blocked_number``."""
        logger.info("Removing dependency: #%d blocks #%d", blocking_number, blocked_number)
        return self._change_dependency("removeBlockedBy", blocked_number, blocking_number)

    def _change_dependency(
        self, mutation_name: str, blocked_number: int, blocking_number: int
    ) -> RelationshipChange:
        blocked_id = self.resolve_node_id(blocked_number)
        blocking_id = self.resolve_node_id(blocking_number)

        mutation = f"""
        mutation($blockedId: ID!, $blockingId: ID!) {{
            {mutation_name}(input: {{
                issueId: $blockedId,
                blockingIssueId: $blockingId
            }}) {{
                issue {{ id number title state }}
                blockingIssue {{ id number title state }}
            }}
        }}
        """
        data = self._graphql(mutation, {"blockedId": blocked_id, "blockingId": blocking_id})
        result = _mutation_result(data, mutation_name)
        return RelationshipChange(
            source=_ref(result["issue"]), target=_ref(result["blockingIssue"])
        )
