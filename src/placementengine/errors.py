"""Exception hierarchy for the placement engine."""

from __future__ import annotations


class PlacementEngineError(Exception):
    """Base class for engine failures."""


class EngineConstructionError(PlacementEngineError, ValueError):
    """Raised when an engine cannot be built from the given inputs."""


class PolicyConfigurationError(EngineConstructionError):
    """Raised for missing, unknown or malformed policy blocks."""


class PolicyFetchError(PlacementEngineError):
    """Raised when a remote policy document cannot be retrieved or decoded."""

    def __init__(self, url: str, message: str):
        super().__init__(f"Failed to fetch policies from {url}: {message}")
        self.url = url


class StudentNotFoundError(PlacementEngineError, LookupError):
    """Raised when a student id is not part of the pool."""

    def __init__(self, student_id: int):
        super().__init__(f"Student with ID {student_id} not found")
        self.student_id = student_id


class IneligibleTransitionError(PlacementEngineError):
    """Raised when a placement is applied to a student who fails the decision check."""

    def __init__(self, student_id: int, company_name: str, reasons: list[str]):
        super().__init__(
            f"Student {student_id} is not eligible for {company_name}: {', '.join(reasons)}"
        )
        self.student_id = student_id
        self.company_name = company_name
        self.reasons = list(reasons)
