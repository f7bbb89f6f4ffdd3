"""Core placement eligibility components."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..schemas import Student
from .models import PolicyContext, PolicyKey, PolicyResult

# NOTE: keep imports explicit for export clarity.
from .engine import (
    DEFAULT_REASON,
    PlacementCounts,
    PlacementEngine,
    PlacementPercentages,
    StudentEligibility,
    SummaryReport,
)
from .evaluators import (
    CgpaThresholdEvaluator,
    DreamCompanyEvaluator,
    DreamOfferEvaluator,
    MaxCompaniesEvaluator,
    OfferCategoryEvaluator,
    PlacementPercentageEvaluator,
)
from .registry import POLICY_REGISTRY, PolicyEntry
from .statistics import PolicyStatistics


@runtime_checkable
class PolicyEvaluator(Protocol):
    """Evaluator contract for a single placement policy."""

    key: PolicyKey

    def evaluate(self, student: Student, context: PolicyContext) -> PolicyResult:
        """Return the policy outcome for a student under the given context."""


__all__ = [
    "DEFAULT_REASON",
    "PolicyEvaluator",
    "PolicyContext",
    "PolicyKey",
    "PolicyResult",
    "PlacementEngine",
    "StudentEligibility",
    "SummaryReport",
    "PlacementCounts",
    "PlacementPercentages",
    "PolicyStatistics",
    "PolicyEntry",
    "POLICY_REGISTRY",
    "DreamCompanyEvaluator",
    "MaxCompaniesEvaluator",
    "CgpaThresholdEvaluator",
    "PlacementPercentageEvaluator",
    "OfferCategoryEvaluator",
    "DreamOfferEvaluator",
]
