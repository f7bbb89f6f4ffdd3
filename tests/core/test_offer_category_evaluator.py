from __future__ import annotations

from typing import Any

import pytest

from placementengine.core import PolicyContext
from placementengine.core.evaluators import OfferCategoryEvaluator
from placementengine.schemas import Company, Policies, Student


def build_policies(**offer_category: Any) -> Policies:
    block = {
        "enabled": True,
        "l1_threshold": 1_000_000,
        "l2_threshold": 600_000,
        "l3_threshold": 0,
        "required_hike_percentage_l2": 20,
    }
    block.update(offer_category)
    return Policies.model_validate(
        {
            "dream_company_policy": {"enabled": True},
            "max_companies_policy": {"enabled": True, "max_applications": 3},
            "cgpa_threshold_policy": {"enabled": True, "min_cgpa": 7.0, "high_salary_threshold": 500_000},
            "placement_percentage_policy": {"enabled": True, "target_percentage": 50},
            "offer_category_policy": block,
            "dream_offer_policy": {"enabled": True},
        }
    )


def build_context(offered_salary: float, **offer_category: Any) -> PolicyContext:
    return PolicyContext(
        company=Company(name="Acme", offered_salary=offered_salary),
        policies=build_policies(**offer_category),
        placement_percentage=lambda: 0.0,
    )


def build_student(**kwargs: Any) -> Student:
    defaults: dict[str, Any] = {"id": 1, "is_placed": True, "companies_applied": 1}
    defaults.update(kwargs)
    return Student(**defaults)


@pytest.mark.parametrize("offered_salary", [400_000, 1_500_000, 5_000_000])
def test_l1_student_is_always_ineligible(offered_salary: float):
    evaluator = OfferCategoryEvaluator()
    student = build_student(current_salary=1_200_000)

    result = evaluator.evaluate(student, build_context(offered_salary))

    assert result.eligible is False
    assert "L1" in result.reasons[0]


def test_l2_student_needs_required_hike():
    evaluator = OfferCategoryEvaluator()
    student = build_student(current_salary=800_000)

    short = evaluator.evaluate(student, build_context(900_000, required_hike_percentage_l2=25))
    enough = evaluator.evaluate(student, build_context(1_000_000, required_hike_percentage_l2=25))

    assert short.eligible is False
    assert short.reasons == ["[FAIL] Company salary 900000 below required 1000000 for L2 student"]
    assert enough.eligible is True


def test_l3_student_is_unrestricted():
    evaluator = OfferCategoryEvaluator()
    student = build_student(current_salary=300_000)

    result = evaluator.evaluate(student, build_context(100_000))

    assert result.eligible is True
    assert "L3" in result.reasons[0]


def test_unplaced_student_is_not_applicable():
    evaluator = OfferCategoryEvaluator()
    student = build_student(is_placed=False, current_salary=2_000_000)

    result = evaluator.evaluate(student, build_context(100_000))

    assert result.eligible is True
    assert result.reasons == ["[PASS] Student is not placed yet"]


def test_band_boundaries_are_inclusive():
    policy = build_policies().offer_category_policy

    assert OfferCategoryEvaluator.band_for(1_000_000, policy) == "L1"
    assert OfferCategoryEvaluator.band_for(999_999, policy) == "L2"
    assert OfferCategoryEvaluator.band_for(600_000, policy) == "L2"
    assert OfferCategoryEvaluator.band_for(599_999, policy) == "L3"
