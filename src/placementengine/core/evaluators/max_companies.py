"""Cap on applications for already placed students."""

from __future__ import annotations

from ...schemas import Student
from ..models import PolicyContext, PolicyKey, PolicyResult


class MaxCompaniesEvaluator:
    key = PolicyKey.MAX_COMPANIES

    def evaluate(self, student: Student, context: PolicyContext) -> PolicyResult:
        policy = context.policies.max_companies_policy
        if not policy.enabled:
            return PolicyResult.passed("Max Companies Policy disabled")
        if not student.is_placed:
            return PolicyResult.passed("Student is not placed yet")

        applied = student.companies_applied
        limit = policy.max_applications
        if applied < limit:
            return PolicyResult.passed(f"Applied to {applied}, max allowed {limit}")
        return PolicyResult.failed(f"Applied to {applied}, reached max allowed {limit}")
