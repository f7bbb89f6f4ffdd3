"""Minimum CGPA for high-salary offers."""

from __future__ import annotations

from ...schemas import Student
from ..models import PolicyContext, PolicyKey, PolicyResult, format_number


class CgpaThresholdEvaluator:
    """Require ``min_cgpa`` only when the offer reaches ``high_salary_threshold``."""

    key = PolicyKey.CGPA_THRESHOLD

    def evaluate(self, student: Student, context: PolicyContext) -> PolicyResult:
        policy = context.policies.cgpa_threshold_policy
        if not policy.enabled:
            return PolicyResult.passed("CGPA Threshold Policy disabled")

        offered = context.company.offered_salary
        if offered < policy.high_salary_threshold:
            return PolicyResult.passed(
                f"Company salary {format_number(offered)} below high-salary threshold "
                f"{format_number(policy.high_salary_threshold)}"
            )

        cgpa = format_number(student.cgpa)
        minimum = format_number(policy.min_cgpa)
        if student.cgpa >= policy.min_cgpa:
            return PolicyResult.passed(f"CGPA {cgpa} meets threshold {minimum}")
        return PolicyResult.failed(f"CGPA {cgpa} below threshold {minimum}")
