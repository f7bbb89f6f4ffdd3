"""Salary band restrictions for placed students."""

from __future__ import annotations

from typing import Literal

from ...schemas import OfferCategoryPolicy, Student
from ..models import PolicyContext, PolicyKey, PolicyResult, format_number

OfferBand = Literal["L1", "L2", "L3"]


class OfferCategoryEvaluator:
    """Band the student's current salary and constrain the next offer.

    L1 students cannot apply further, L2 students need the configured hike
    and L3 students are unrestricted.
    """

    key = PolicyKey.OFFER_CATEGORY

    def evaluate(self, student: Student, context: PolicyContext) -> PolicyResult:
        policy = context.policies.offer_category_policy
        if not policy.enabled:
            return PolicyResult.passed("Offer Category Policy disabled")
        if not student.is_placed:
            return PolicyResult.passed("Student is not placed yet")

        band = self.band_for(student.current_salary, policy)
        if band == "L1":
            return PolicyResult.failed(
                f"Current salary {format_number(student.current_salary)} is in L1 category, "
                "cannot apply to other companies"
            )

        if band == "L2":
            required = student.current_salary * (1 + policy.required_hike_percentage_l2 / 100)
            offered = context.company.offered_salary
            if offered >= required:
                return PolicyResult.passed(
                    f"Company salary {format_number(offered)} meets required "
                    f"{format_number(required)} for L2 student"
                )
            return PolicyResult.failed(
                f"Company salary {format_number(offered)} below required "
                f"{format_number(required)} for L2 student"
            )

        return PolicyResult.passed("L3 student, no restrictions from Offer Category Policy")

    @staticmethod
    def band_for(salary: float, policy: OfferCategoryPolicy) -> OfferBand:
        if salary >= policy.l1_threshold:
            return "L1"
        if salary >= policy.l2_threshold:
            return "L2"
        return "L3"
