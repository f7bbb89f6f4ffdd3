"""Cohort placement target gating second offers."""

from __future__ import annotations

from ...schemas import Student
from ..models import PolicyContext, PolicyKey, PolicyResult, format_number


class PlacementPercentageEvaluator:
    """Placed students may only apply again once the cohort reaches its target."""

    key = PolicyKey.PLACEMENT_PERCENTAGE

    def evaluate(self, student: Student, context: PolicyContext) -> PolicyResult:
        policy = context.policies.placement_percentage_policy
        if not policy.enabled:
            return PolicyResult.passed("Placement Percentage Policy disabled")
        if not student.is_placed:
            return PolicyResult.passed("Student is not placed yet")

        current = context.placement_percentage()
        target = format_number(policy.target_percentage)
        if current >= policy.target_percentage:
            return PolicyResult.passed(
                f"Placement percentage {current:.2f}% meets target {target}%"
            )
        return PolicyResult.failed(
            f"Placement percentage {current:.2f}% below target {target}%"
        )
