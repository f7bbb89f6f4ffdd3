"""Placement pipeline assembly and execution."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Mapping

import pendulum
import structlog
import yaml
from pydantic import BaseModel, ValidationError

from . import __version__
from .config import DOCUMENT_SUFFIXES, load_document
from .core import PlacementEngine
from .errors import IneligibleTransitionError, StudentNotFoundError
from .schemas import Company, Student
from .sources import (
    HTTPPolicyFetcher,
    InlinePolicies,
    PolicyFetcher,
    PolicySource,
    RemotePolicies,
)


class StudentLoadError(ValueError):
    """Raised when student loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: list[Student]):
        super().__init__("Student loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Student loading failed: {self.errors}"


class StudentLoader:
    """Load student records from a JSON array or a JSON lines file."""

    def load(self, path: Path) -> list[Student]:
        errors: list[str] = []
        students: list[Student] = []
        seen: set[int] = set()

        for label, record in self._records(path, errors):
            try:
                student = Student.model_validate(record)
            except ValidationError as exc:
                errors.append(f"{label}: {exc}")
                continue
            if not student.id:
                errors.append(f"{label}: missing or invalid student id")
                continue
            if student.id in seen:
                errors.append(f"{label}: duplicate student id {student.id}")
                continue
            seen.add(student.id)
            students.append(student)

        if errors:
            raise StudentLoadError(errors, students)
        return students

    @staticmethod
    def _records(path: Path, errors: list[str]) -> Iterable[tuple[str, Any]]:
        if path.suffix == ".jsonl":
            with path.open("r", encoding="utf-8") as handle:
                for idx, line in enumerate(handle, start=1):
                    raw = line.strip()
                    if not raw:
                        continue
                    try:
                        yield f"line {idx}", json.loads(raw)
                    except json.JSONDecodeError as exc:
                        errors.append(f"line {idx}: invalid JSON ({exc})")
            return

        with path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                errors.append(f"invalid JSON ({exc})")
                return
        if isinstance(data, dict):
            data = data.get("students")
        if not isinstance(data, list):
            errors.append("expected a JSON array of students")
            return
        for idx, record in enumerate(data):
            yield f"record {idx}", record


class CompanyLoader:
    """Load one company from a JSON object or an array of companies."""

    def load(self, path: Path, index: int = 0) -> Company:
        with path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid company JSON: {exc}") from exc
        if isinstance(data, list):
            try:
                data = data[index]
            except IndexError as exc:
                raise ValueError(
                    f"Company index {index} out of range ({len(data)} companies)"
                ) from exc
        return Company.model_validate(data)


class PolicyLoader:
    """Turn a CLI/config policy reference into a policy source."""

    def load(self, reference: str | Path | Mapping[str, Any]) -> PolicySource:
        if isinstance(reference, Mapping):
            return InlinePolicies(policies=dict(reference))
        text = str(reference)
        if text.startswith(("http://", "https://")):
            return RemotePolicies(url=text)

        path = Path(text)
        if path.suffix not in DOCUMENT_SUFFIXES:
            raise ValueError(f"Unsupported policy document: {path}")
        try:
            data = load_document(path)
        except (OSError, yaml.YAMLError) as exc:
            raise ValueError(f"Cannot read policy document {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Policy document must be a mapping: {path}")
        return InlinePolicies(policies=data)


class OutputWriter:
    """Persist placement reports."""

    def __init__(self, *, indent: int = 2) -> None:
        self._indent = indent

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=self._indent),
            encoding="utf-8",
        )


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False, default=_json_default))
            handle.write("\n")


class PlacementPipeline:
    """End-to-end placement run for one company."""

    def __init__(
        self,
        *,
        fetcher: PolicyFetcher | None = None,
        student_loader: StudentLoader | None = None,
        company_loader: CompanyLoader | None = None,
        policy_loader: PolicyLoader | None = None,
        writer: OutputWriter | None = None,
        default_policies: str | Mapping[str, Any] | None = None,
    ) -> None:
        self._fetcher = fetcher or HTTPPolicyFetcher()
        self._students = student_loader or StudentLoader()
        self._companies = company_loader or CompanyLoader()
        self._policies = policy_loader or PolicyLoader()
        self._writer = writer or OutputWriter()
        self._default_policies = default_policies
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        *,
        students_path: Path,
        company_path: Path,
        output_path: Path,
        policies: str | Path | Mapping[str, Any] | None = None,
        company_index: int = 0,
        accept: Iterable[int] = (),
        audit_logger: AuditLogger | None = None,
    ) -> dict[str, Any]:
        reference = policies if policies is not None else self._default_policies
        if reference is None:
            raise ValueError("No policy document configured")

        students = self._students.load(students_path)
        company = self._companies.load(company_path, company_index)
        source = self._policies.load(reference)
        engine = PlacementEngine.create(
            students,
            company,
            source,
            fetcher=self._fetcher,
        )

        errors: list[str] = []
        applied: list[int] = []
        for student_id in accept:
            try:
                engine.apply(student_id)
            except (StudentNotFoundError, IneligibleTransitionError) as exc:
                errors.append(str(exc))
                self._logger.warning("pipeline.apply_failed", student_id=student_id, error=str(exc))
                continue
            applied.append(student_id)

        summary = engine.summary_report()
        report = json.loads(json.dumps(asdict(summary), default=_json_default, ensure_ascii=False))

        for entry in summary.all_students:
            if audit_logger:
                audit_logger.append(
                    {
                        "student_id": entry.student.id,
                        "company": company.name,
                        "eligible": entry.eligible,
                        "reasons": entry.reasons,
                        "policy_eligibility": entry.policy_eligibility,
                    }
                )
            self._logger.info(
                "pipeline.result",
                student_id=entry.student.id,
                company=company.name,
                eligible=entry.eligible,
            )

        metadata = {
            "company": company.name,
            "student_count": summary.counts.total_students,
            "policy_source": _describe_source(source),
            "applied": applied,
            "errors": errors,
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        }
        self._writer.write(output_path, {"metadata": metadata, "report": report})
        return report


def _describe_source(source: PolicySource) -> str:
    if isinstance(source, RemotePolicies):
        return source.url
    return "inline"


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, pendulum.DateTime):
        return value.to_iso8601_string()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
