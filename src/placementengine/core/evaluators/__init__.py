"""Evaluator implementations, one per placement policy."""

from .dream_company import DreamCompanyEvaluator
from .max_companies import MaxCompaniesEvaluator
from .cgpa_threshold import CgpaThresholdEvaluator
from .placement_percentage import PlacementPercentageEvaluator
from .offer_category import OfferCategoryEvaluator
from .dream_offer import DreamOfferEvaluator

__all__ = [
    "DreamCompanyEvaluator",
    "MaxCompaniesEvaluator",
    "CgpaThresholdEvaluator",
    "PlacementPercentageEvaluator",
    "OfferCategoryEvaluator",
    "DreamOfferEvaluator",
]
