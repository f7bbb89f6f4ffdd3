"""Placement engine orchestration."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Mapping

import structlog
from pydantic import ValidationError

from ..errors import (
    EngineConstructionError,
    IneligibleTransitionError,
    PolicyConfigurationError,
    PolicyFetchError,
    StudentNotFoundError,
)
from ..schemas import Company, Policies, Student
from ..sources import (
    HTTPPolicyFetcher,
    PolicyFetcher,
    as_policy_source,
    coerce_policies,
    resolve_policies,
)
from .models import PolicyContext, PolicyKey, PolicyResult
from .registry import OVERRIDE_ENTRY, POLICY_REGISTRY
from .statistics import PolicyStatistics, PolicyTallyBuilder, percentage

DEFAULT_REASON = "Eligible by default policy"


@dataclass(slots=True)
class StudentEligibility:
    """Student snapshot annotated with both eligibility views."""

    student: Student
    policy_eligibility: dict[str, bool]
    eligible: bool
    reasons: list[str]


@dataclass(slots=True)
class PlacementCounts:
    total_students: int
    placed_students: int
    unplaced_students: int
    eligible_students: int
    ineligible_students: int


@dataclass(slots=True)
class PlacementPercentages:
    placed_students: float
    unplaced_students: float
    eligible_students: float
    ineligible_students: float


@dataclass(slots=True)
class SummaryReport:
    """Consolidated view of one company's applicant pool."""

    company: Company
    counts: PlacementCounts
    percentages: PlacementPercentages
    policy_statistics: list[PolicyStatistics]
    all_students: list[StudentEligibility]
    eligible_students: list[StudentEligibility]
    ineligible_students: list[StudentEligibility]
    placed_students: list[StudentEligibility]
    unplaced_students: list[StudentEligibility]


class PlacementEngine:
    """Evaluates a student pool against one company's placement policies.

    The engine owns private copies of the students and the company. Placement
    updates and policy replacement are serialised by an internal lock, and
    batch passes take the same lock so each pass reads a consistent pool.
    """

    def __init__(
        self,
        students: Iterable[Student | Mapping[str, Any]] | None,
        company: Company | Mapping[str, Any] | None,
        policies: Policies | Mapping[str, Any] | None,
    ) -> None:
        self._logger = structlog.get_logger(__name__)
        self._lock = threading.RLock()
        self._students = self._build_pool(students)
        self._company = self._coerce_company(company)
        self._policies = coerce_policies(policies)
        self._logger.info(
            "engine.created",
            company=self._company.name,
            student_count=len(self._students),
        )

    @classmethod
    def create(
        cls,
        students: Iterable[Student | Mapping[str, Any]] | None,
        company: Company | Mapping[str, Any] | None,
        policies: Any,
        *,
        fetcher: PolicyFetcher | None = None,
    ) -> PlacementEngine:
        """Build an engine from inline policies or a policy document URL.

        The policy source is resolved once, before any student is evaluated.
        A failed fetch aborts construction.
        """
        source = as_policy_source(policies)
        try:
            resolved = resolve_policies(source, fetcher or HTTPPolicyFetcher())
        except PolicyFetchError as exc:
            raise EngineConstructionError(str(exc)) from exc
        return cls(students, company, resolved)

    # -- construction -----------------------------------------------------

    @staticmethod
    def _build_pool(
        students: Iterable[Student | Mapping[str, Any]] | None,
    ) -> dict[int, Student]:
        if students is None or isinstance(students, (str, bytes, Mapping)):
            raise EngineConstructionError("Students must be provided as a non-empty sequence")
        records = list(students)
        if not records:
            raise EngineConstructionError("Students must be provided as a non-empty sequence")

        pool: dict[int, Student] = {}
        for index, record in enumerate(records):
            try:
                student = (
                    record.model_copy(deep=True)
                    if isinstance(record, Student)
                    else Student.model_validate(record)
                )
            except ValidationError as exc:
                raise EngineConstructionError(f"Invalid student record at index {index}: {exc}") from exc
            if not student.id:
                raise EngineConstructionError("Each student must have a valid ID")
            if student.id in pool:
                raise EngineConstructionError(f"Duplicate student ID {student.id}")
            pool[student.id] = student
        return pool

    @staticmethod
    def _coerce_company(company: Company | Mapping[str, Any] | None) -> Company:
        if company is None:
            raise EngineConstructionError("Company must be provided")
        if isinstance(company, Company):
            return company.model_copy(deep=True)
        try:
            return Company.model_validate(company)
        except ValidationError as exc:
            raise EngineConstructionError(f"Invalid company record: {exc}") from exc

    # -- accessors --------------------------------------------------------

    @property
    def company(self) -> Company:
        return self._company.model_copy(deep=True)

    @property
    def policies(self) -> Policies:
        return self._policies.model_copy(deep=True)

    def get_student(self, student_id: int) -> Student:
        return self._require_student(student_id).model_copy(deep=True)

    def students(self) -> list[Student]:
        return [student.model_copy(deep=True) for student in self._students.values()]

    def placement_percentage(self) -> float:
        """Share of the pool already placed, 0 for an empty pool."""
        total = len(self._students)
        if total == 0:
            return 0.0
        placed = sum(1 for student in self._students.values() if student.is_placed)
        return placed / total * 100

    # -- single-student evaluation ---------------------------------------

    def check_student(self, student_id: int) -> PolicyResult:
        """Decision-mode verdict for one student against current pool state."""
        with self._lock:
            student = self._require_student(student_id)
            return self._decide(student, self._live_context())

    def policy_eligibility(self, student_id: int) -> dict[str, bool]:
        """Full-map view for one student against current pool state."""
        with self._lock:
            student = self._require_student(student_id)
            return self._policy_map(student, self._live_context())

    # -- batch ------------------------------------------------------------

    def process_placements(self) -> dict[int, PolicyResult]:
        with self._lock:
            context = self._pass_context()
            return {
                student_id: self._decide(student, context)
                for student_id, student in self._students.items()
            }

    def all_students(self) -> list[StudentEligibility]:
        with self._lock:
            return self._annotate(self._pass_context())

    def eligible_students(self) -> list[StudentEligibility]:
        return [entry for entry in self.all_students() if entry.eligible]

    def ineligible_students(self) -> list[StudentEligibility]:
        return [entry for entry in self.all_students() if not entry.eligible]

    def policy_statistics(self) -> list[PolicyStatistics]:
        with self._lock:
            return self._policy_statistics(self._pass_context())

    def summary_report(self) -> SummaryReport:
        with self._lock:
            context = self._pass_context()
            annotated = self._annotate(context)
            statistics = self._policy_statistics(context)

        eligible = [entry for entry in annotated if entry.eligible]
        ineligible = [entry for entry in annotated if not entry.eligible]
        placed = [entry for entry in annotated if entry.student.is_placed]
        unplaced = [entry for entry in annotated if not entry.student.is_placed]
        total = len(annotated)

        return SummaryReport(
            company=self.company,
            counts=PlacementCounts(
                total_students=total,
                placed_students=len(placed),
                unplaced_students=len(unplaced),
                eligible_students=len(eligible),
                ineligible_students=len(ineligible),
            ),
            percentages=PlacementPercentages(
                placed_students=percentage(len(placed), total),
                unplaced_students=percentage(len(unplaced), total),
                eligible_students=percentage(len(eligible), total),
                ineligible_students=percentage(len(ineligible), total),
            ),
            policy_statistics=statistics,
            all_students=annotated,
            eligible_students=eligible,
            ineligible_students=ineligible,
            placed_students=placed,
            unplaced_students=unplaced,
        )

    # -- mutation ---------------------------------------------------------

    def apply(self, student_id: int) -> Student:
        """Record that ``student_id`` accepted this company's offer.

        Returns a snapshot of the updated student.
        """
        with self._lock:
            student = self._require_student(student_id)
            result = self._decide(student, self._live_context())
            if not result.eligible:
                self._logger.warning(
                    "placement.rejected",
                    student_id=student_id,
                    company=self._company.name,
                    reasons=result.reasons,
                )
                raise IneligibleTransitionError(student_id, self._company.name, result.reasons)

            student.is_placed = True
            student.current_salary = self._company.offered_salary
            student.companies_applied += 1
            self._logger.info(
                "placement.applied",
                student_id=student_id,
                company=self._company.name,
                current_salary=student.current_salary,
                companies_applied=student.companies_applied,
            )
            return student.model_copy(deep=True)

    def update_policies(self, updates: Policies | Mapping[str, Any]) -> Policies:
        """Replace whole policy blocks, keeping the ones not mentioned."""
        if isinstance(updates, Policies):
            updates = dict(updates)
        with self._lock:
            try:
                self._policies = self._policies.merge(updates)
            except KeyError as exc:
                raise PolicyConfigurationError(f"Unknown policy key: {exc.args[0]}") from exc
            except ValidationError as exc:
                raise PolicyConfigurationError(f"Invalid policies: {exc}") from exc
            self._logger.info("policies.updated", keys=sorted(str(key) for key in updates))
            return self.policies

    # -- internals --------------------------------------------------------

    def _require_student(self, student_id: int) -> Student:
        student = self._students.get(student_id)
        if student is None:
            raise StudentNotFoundError(student_id)
        return student

    def _context(self, placement_percentage: Callable[[], float]) -> PolicyContext:
        return PolicyContext(
            company=self._company,
            policies=self._policies,
            placement_percentage=placement_percentage,
        )

    def _live_context(self) -> PolicyContext:
        return self._context(self.placement_percentage)

    def _pass_context(self) -> PolicyContext:
        # Placement state cannot change during a locked pass.
        fixed = self.placement_percentage()
        return self._context(lambda: fixed)

    def _decide(self, student: Student, context: PolicyContext) -> PolicyResult:
        override = OVERRIDE_ENTRY.evaluator.evaluate(student, context)
        if override.eligible and context.policies.dream_company_policy.enabled:
            return PolicyResult(eligible=True, reasons=list(override.reasons))

        reasons: list[str] = []
        for entry in POLICY_REGISTRY[1:]:
            result = entry.evaluator.evaluate(student, context)
            if not result.eligible:
                return PolicyResult(eligible=False, reasons=reasons + result.reasons)
            reasons.extend(result.reasons)

        return PolicyResult(eligible=True, reasons=reasons or [DEFAULT_REASON])

    @staticmethod
    def _scan(student: Student, context: PolicyContext) -> Iterator[tuple[PolicyKey, bool]]:
        """Yield each policy outcome in order, stopping after the first failure."""
        for entry in POLICY_REGISTRY:
            eligible = entry.evaluator.evaluate(student, context).eligible
            yield entry.key, eligible
            if not eligible:
                return

    def _policy_map(self, student: Student, context: PolicyContext) -> dict[str, bool]:
        eligibility = {entry.key.value: False for entry in POLICY_REGISTRY}
        for key, eligible in self._scan(student, context):
            eligibility[key.value] = eligible
        return eligibility

    def _annotate(self, context: PolicyContext) -> list[StudentEligibility]:
        annotated: list[StudentEligibility] = []
        for student in self._students.values():
            decision = self._decide(student, context)
            snapshot = student.model_copy(deep=True)
            snapshot.eligible = decision.eligible
            annotated.append(
                StudentEligibility(
                    student=snapshot,
                    policy_eligibility=self._policy_map(student, context),
                    eligible=decision.eligible,
                    reasons=list(decision.reasons),
                )
            )
        return annotated

    def _policy_statistics(self, context: PolicyContext) -> list[PolicyStatistics]:
        builder = PolicyTallyBuilder()
        for student_id, student in self._students.items():
            builder.add(student_id, self._scan(student, context))
        return builder.build()
