"""Fixed, ordered binding of policy keys to evaluators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .evaluators import (
    CgpaThresholdEvaluator,
    DreamCompanyEvaluator,
    DreamOfferEvaluator,
    MaxCompaniesEvaluator,
    OfferCategoryEvaluator,
    PlacementPercentageEvaluator,
)
from .models import PolicyKey

if TYPE_CHECKING:
    from . import PolicyEvaluator


@dataclass(frozen=True, slots=True)
class PolicyEntry:
    key: PolicyKey
    label: str
    evaluator: PolicyEvaluator
    needs_cohort: bool = False


POLICY_REGISTRY: tuple[PolicyEntry, ...] = (
    PolicyEntry(PolicyKey.DREAM_COMPANY, "Dream Company", DreamCompanyEvaluator()),
    PolicyEntry(PolicyKey.MAX_COMPANIES, "Max Companies", MaxCompaniesEvaluator()),
    PolicyEntry(PolicyKey.CGPA_THRESHOLD, "CGPA Threshold", CgpaThresholdEvaluator()),
    PolicyEntry(
        PolicyKey.PLACEMENT_PERCENTAGE,
        "Placement Percentage Policy",
        PlacementPercentageEvaluator(),
        needs_cohort=True,
    ),
    PolicyEntry(PolicyKey.OFFER_CATEGORY, "Offer Category Policy", OfferCategoryEvaluator()),
    PolicyEntry(PolicyKey.DREAM_OFFER, "Dream Offer Policy", DreamOfferEvaluator()),
)

OVERRIDE_ENTRY = POLICY_REGISTRY[0]
