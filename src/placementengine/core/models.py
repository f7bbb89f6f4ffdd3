"""Value types shared by the policy evaluators and the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from ..schemas import Company, Policies

PASS_TAG = "[PASS]"
FAIL_TAG = "[FAIL]"


class PolicyKey(str, Enum):
    """Closed set of policies, in evaluation order."""

    DREAM_COMPANY = "dream_company_policy"
    MAX_COMPANIES = "max_companies_policy"
    CGPA_THRESHOLD = "cgpa_threshold_policy"
    PLACEMENT_PERCENTAGE = "placement_percentage_policy"
    OFFER_CATEGORY = "offer_category_policy"
    DREAM_OFFER = "dream_offer_policy"


@dataclass(slots=True)
class PolicyResult:
    """Outcome of one policy (or of the whole decision chain)."""

    eligible: bool
    reasons: list[str] = field(default_factory=list)

    @classmethod
    def passed(cls, message: str) -> PolicyResult:
        return cls(eligible=True, reasons=[f"{PASS_TAG} {message}"])

    @classmethod
    def failed(cls, message: str) -> PolicyResult:
        return cls(eligible=False, reasons=[f"{FAIL_TAG} {message}"])


@dataclass(frozen=True, slots=True)
class PolicyContext:
    """Inputs an evaluator may read besides the student itself.

    ``placement_percentage`` is a callable so the cohort figure is only
    computed by evaluators that actually reach the branch needing it.
    """

    company: Company
    policies: Policies
    placement_percentage: Callable[[], float]


def format_number(value: float) -> str:
    """Render whole numbers without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)
