"""Pydantic schema definitions for placement records and policy documents."""

from __future__ import annotations

from .company import Company
from .policies import (
    CgpaThresholdPolicy,
    DreamCompanyPolicy,
    DreamOfferPolicy,
    MaxCompaniesPolicy,
    OfferCategoryPolicy,
    PlacementPercentagePolicy,
    Policies,
)
from .student import Student

__all__ = [
    "Company",
    "Student",
    "Policies",
    "DreamCompanyPolicy",
    "MaxCompaniesPolicy",
    "CgpaThresholdPolicy",
    "PlacementPercentagePolicy",
    "OfferCategoryPolicy",
    "DreamOfferPolicy",
]
