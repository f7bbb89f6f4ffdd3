"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError


class SourceConfig(BaseModel):
    timeout: float = 10.0
    headers: dict[str, str] = Field(default_factory=dict)


class ReportConfig(BaseModel):
    company_index: int = 0
    indent: int = 2


class AppConfig(BaseModel):
    """Top-level CLI configuration.

    ``policies`` is either an inline policy document or a path/URL string.
    """

    policies: dict[str, Any] | str | None = None
    source: SourceConfig = Field(default_factory=SourceConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {
            "source": self.source.model_dump(),
            "report": self.report.model_dump(),
        }
        if self.policies is not None:
            settings["policies"] = self.policies
        return settings


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
