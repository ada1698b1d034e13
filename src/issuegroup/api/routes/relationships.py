"""Sub-issue and dependency endpoints."""

from fastapi import APIRouter, status

from issuegroup.api.dependencies import TrackerDep
from issuegroup.api.models import (
    APIResponse,
    DependencyChange,
    DependencyListResponse,
    RelationshipChangeResponse,
    SubIssueCreate,
    SubIssueListResponse,
    dataclass_to_response,
)

router = APIRouter(tags=["relationships"])


@router.get(
    "/repos/{owner}/{repo}/issues/{number}/sub-issues",
    response_model=APIResponse[SubIssueListResponse],
)
def list_sub_issues(number: int, tracker: TrackerDep) -> APIResponse[SubIssueListResponse]:
    """List sub-issues of a parent issue."""
    result = tracker.list_sub_issues(number)
    return APIResponse(data=dataclass_to_response(SubIssueListResponse, result))


@router.post(
    "/repos/{owner}/{repo}/issues/{number}/sub-issues",
    response_model=APIResponse[RelationshipChangeResponse],
    status_code=status.HTTP_201_CREATED,
)
def add_sub_issue(
    number: int, body: SubIssueCreate, tracker: TrackerDep
) -> APIResponse[RelationshipChangeResponse]:
    """Make another issue a sub-issue of this one."""
    result = tracker.add_sub_issue(number, body.child_number, replace_parent=body.replace_parent)
    return APIResponse(data=dataclass_to_response(RelationshipChangeResponse, result))


@router.get(
    "/repos/{owner}/{repo}/issues/{number}/dependencies",
    response_model=APIResponse[DependencyListResponse],
)
def list_dependencies(number: int, tracker: TrackerDep) -> APIResponse[DependencyListResponse]:
    """List issues this issue blocks and is blocked by."""
    result = tracker.list_dependencies(number)
    return APIResponse(data=dataclass_to_response(DependencyListResponse, result))


@router.post(
    "/repos/{owner}/{repo}/issues/{number}/dependencies",
    response_model=APIResponse[RelationshipChangeResponse],
    status_code=status.HTTP_201_CREATED,
)
def add_dependency(
    number: int, body: DependencyChange, tracker: TrackerDep
) -> APIResponse[RelationshipChangeResponse]:
    """Mark this issue as blocked by another."""
    result = tracker.add_dependency(number, body.blocking_number)
    return APIResponse(data=dataclass_to_response(RelationshipChangeResponse, result))


@router.delete(
    "/repos/{owner}/{repo}/issues/{number}/dependencies",
    response_model=APIResponse[RelationshipChangeResponse],
)
def remove_dependency(
    number: int, body: DependencyChange, tracker: TrackerDep
) -> APIResponse[RelationshipChangeResponse]:
    """Remove a blocker from this issue."""
    result = tracker.remove_dependency(number, body.blocking_number)
    return APIResponse(data=dataclass_to_response(RelationshipChangeResponse, result))
