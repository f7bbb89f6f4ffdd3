"""Per-policy tallies and cohort percentages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .models import PolicyKey
from .registry import POLICY_REGISTRY


@dataclass(slots=True)
class PolicyTally:
    eligible_student_ids: list[int] = field(default_factory=list)
    ineligible_student_ids: list[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.eligible_student_ids) + len(self.ineligible_student_ids)


@dataclass(slots=True)
class PolicyStatistics:
    """Reportable view of one policy's tally."""

    policy_key: str
    policy_label: str
    has_any_eligible: bool
    eligible_percentage: float
    ineligible_percentage: float
    eligible_student_ids: list[int]
    ineligible_student_ids: list[int]


def percentage(part: int, whole: int) -> float:
    """``part / whole * 100`` rounded to two places, 0 for an empty whole."""
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, 2)


class PolicyTallyBuilder:
    """Fold per-student scans into per-policy tallies.

    A student counts towards each policy up to and including the first one
    they fail; later policies see nothing from that student.
    """

    def __init__(self) -> None:
        self._tallies: dict[PolicyKey, PolicyTally] = {
            entry.key: PolicyTally() for entry in POLICY_REGISTRY
        }

    def add(self, student_id: int, scan: Iterable[tuple[PolicyKey, bool]]) -> None:
        for key, eligible in scan:
            tally = self._tallies[key]
            if eligible:
                tally.eligible_student_ids.append(student_id)
            else:
                tally.ineligible_student_ids.append(student_id)
                break

    def build(self) -> list[PolicyStatistics]:
        statistics: list[PolicyStatistics] = []
        for entry in POLICY_REGISTRY:
            tally = self._tallies[entry.key]
            statistics.append(
                PolicyStatistics(
                    policy_key=entry.key.value,
                    policy_label=entry.label,
                    has_any_eligible=bool(tally.eligible_student_ids),
                    eligible_percentage=percentage(len(tally.eligible_student_ids), tally.total),
                    ineligible_percentage=percentage(len(tally.ineligible_student_ids), tally.total),
                    eligible_student_ids=list(tally.eligible_student_ids),
                    ineligible_student_ids=list(tally.ineligible_student_ids),
                )
            )
        return statistics
