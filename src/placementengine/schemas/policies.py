"""Policy configuration schemas.

Each block mirrors one entry of the policy document. Blocks are strict: every
field is required and unknown keys are rejected so that a typo in a threshold
name never silently disables a rule.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_POLICY_MODEL_CONFIG = ConfigDict(
    extra="forbid",
    alias_generator=to_camel,
    populate_by_name=True,
)


class DreamCompanyPolicy(BaseModel):
    enabled: bool

    model_config = _POLICY_MODEL_CONFIG


class MaxCompaniesPolicy(BaseModel):
    enabled: bool
    max_applications: int

    model_config = _POLICY_MODEL_CONFIG


class CgpaThresholdPolicy(BaseModel):
    enabled: bool
    min_cgpa: float
    high_salary_threshold: float

    model_config = _POLICY_MODEL_CONFIG


class PlacementPercentagePolicy(BaseModel):
    enabled: bool
    target_percentage: float

    model_config = _POLICY_MODEL_CONFIG


class OfferCategoryPolicy(BaseModel):
    """Salary bands: L1 at or above ``l1_threshold``, L2 at or above ``l2_threshold``."""

    enabled: bool
    l1_threshold: float
    l2_threshold: float
    l3_threshold: float
    required_hike_percentage_l2: float

    model_config = _POLICY_MODEL_CONFIG


class DreamOfferPolicy(BaseModel):
    enabled: bool

    model_config = _POLICY_MODEL_CONFIG


class Policies(BaseModel):
    """Complete policy set; all six blocks are mandatory, other top-level keys are ignored."""

    dream_company_policy: DreamCompanyPolicy
    max_companies_policy: MaxCompaniesPolicy
    cgpa_threshold_policy: CgpaThresholdPolicy
    placement_percentage_policy: PlacementPercentagePolicy
    offer_category_policy: OfferCategoryPolicy
    dream_offer_policy: DreamOfferPolicy

    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @classmethod
    def field_for(cls, key: str) -> str | None:
        """Return the field name for a snake_case name or camelCase alias."""
        for name, info in cls.model_fields.items():
            if key in (name, info.alias):
                return name
        return None

    def merge(self, updates: Mapping[str, Any]) -> Policies:
        """Return a copy with the given blocks replaced wholesale.

        Raises ``KeyError`` for an unknown block name and pydantic's
        ``ValidationError`` when a replacement block is incomplete.
        """
        data = self.model_dump()
        for key, value in updates.items():
            name = self.field_for(key)
            if name is None:
                raise KeyError(key)
            data[name] = value.model_dump() if isinstance(value, BaseModel) else value
        return Policies.model_validate(data)
