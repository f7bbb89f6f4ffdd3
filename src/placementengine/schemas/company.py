"""Hiring company schema."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Company(BaseModel):
    """Company running one placement drive."""

    name: str
    offered_salary: float
    category: str = ""
    location: str | None = None
    job_role: str | None = None
    requirements: list[str] = Field(default_factory=list)
    deadline: datetime | None = None

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )
