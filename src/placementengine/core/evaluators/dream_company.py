"""Dream company match."""

from __future__ import annotations

from ...schemas import Student
from ..models import PolicyContext, PolicyKey, PolicyResult


class DreamCompanyEvaluator:
    """Pass when the hiring company is the student's declared dream company.

    The engine treats a pass here as an override for every other policy.
    """

    key = PolicyKey.DREAM_COMPANY

    def evaluate(self, student: Student, context: PolicyContext) -> PolicyResult:
        policy = context.policies.dream_company_policy
        if not policy.enabled:
            return PolicyResult.passed("Dream Company Policy disabled")

        dream = student.dream_company_name
        company = context.company.name
        if dream.casefold() == company.casefold():
            return PolicyResult.passed(
                f"Matches student's dream company {dream} and company {company}"
            )
        return PolicyResult.failed(
            f"Not student's dream company {dream} and company {company}"
        )
