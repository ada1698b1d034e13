"""Group detection - Transitive closure and ordering of related tickets."""

from issuegroup.detection.detector import GroupDetector, build_result, detect_group
from issuegroup.detection.exceptions import (
    DependencyCycleError,
    DetectionError,
    SeedNotFoundError,
)
from issuegroup.detection.expander import ClosureExpander
from issuegroup.detection.membership import filter_group_members
from issuegroup.detection.models import GroupMember, GroupPrimary, GroupResult
from issuegroup.detection.ordering import blocking_edges, topological_sort

__all__ = [
    "ClosureExpander",
    "DependencyCycleError",
    "DetectionError",
    "GroupDetector",
    "GroupMember",
    "GroupPrimary",
    "GroupResult",
    "SeedNotFoundError",
    "blocking_edges",
    "build_result",
    "detect_group",
    "filter_group_members",
    "topological_sort",
]
