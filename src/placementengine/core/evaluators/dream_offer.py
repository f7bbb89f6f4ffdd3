"""Dream offer amount for placed students."""

from __future__ import annotations

from ...schemas import Student
from ..models import PolicyContext, PolicyKey, PolicyResult, format_number


class DreamOfferEvaluator:
    key = PolicyKey.DREAM_OFFER

    def evaluate(self, student: Student, context: PolicyContext) -> PolicyResult:
        policy = context.policies.dream_offer_policy
        if not policy.enabled:
            return PolicyResult.passed("Dream Offer Policy disabled")
        if not student.is_placed:
            return PolicyResult.passed("Student is not placed yet")

        offered = format_number(context.company.offered_salary)
        dream = format_number(student.dream_offer_amount)
        if context.company.offered_salary >= student.dream_offer_amount:
            return PolicyResult.passed(f"Company salary {offered} meets dream offer {dream}")
        return PolicyResult.failed(f"Company salary {offered} below dream offer {dream}")
