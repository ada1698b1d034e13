"""Exceptions for group detection."""

from __future__ import annotations

from collections.abc import Iterable


class DetectionError(Exception):
    """Base exception for group detection errors."""


class SeedNotFoundError(DetectionError):
    """The seed issue could not be resolved, so no group can be detected."""

    def __init__(self, number: int, scope: str) -> None:
        super().__init__(f"Issue #{number} not found in {scope}")
        self.number = number
        self.scope = scope


class DependencyCycleError(DetectionError):
    """Group members block each other in a cycle and cannot be ordered."""

    def __init__(self, numbers: Iterable[int]) -> None:
        self.numbers = sorted(numbers)
        listed = ", ".join(f"#{n}" for n in self.numbers)
        super().__init__(
            f"Cycle detected in dependencies! Issues involved: {listed}. "
            "These issues form a circular dependency chain. Remove one dependency to resolve."
        )
