"""issuegroup - Detects and orders groups of related GitHub issues."""

from issuegroup.detection import DependencyCycleError, GroupResult, SeedNotFoundError, detect_group

__version__ = "0.1.0"

__all__ = [
    "DependencyCycleError",
    "GroupResult",
    "SeedNotFoundError",
    "__version__",
    "detect_group",
]
