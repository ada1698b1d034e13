"""Group detection endpoint."""

from fastapi import APIRouter

from issuegroup.api.dependencies import DefaultTrackerDep, TrackerDep
from issuegroup.api.models import APIResponse, GroupResponse, dataclass_to_response
from issuegroup.detection import GroupDetector

router = APIRouter(tags=["groups"])


@router.get(
    "/repos/{owner}/{repo}/issues/{number}/group",
    response_model=APIResponse[GroupResponse],
)
def detect_group(number: int, tracker: TrackerDep) -> APIResponse[GroupResponse]:
    """Detect the implementation group of an issue, blockers first."""
    result = GroupDetector(tracker).detect(number)
    return APIResponse(data=dataclass_to_response(GroupResponse, result))


@router.get(
    "/issues/{number}/group",
    response_model=APIResponse[GroupResponse],
)
def detect_group_in_default_repo(
    number: int, tracker: DefaultTrackerDep
) -> APIResponse[GroupResponse]:
    """Detect a group in the repository configured by GITHUB_OWNER/GITHUB_REPO."""
    result = GroupDetector(tracker).detect(number)
    return APIResponse(data=dataclass_to_response(GroupResponse, result))
