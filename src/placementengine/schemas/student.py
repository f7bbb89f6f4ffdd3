"""Student record schema."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Student(BaseModel):
    """Applicant record as supplied by the placement office."""

    id: int
    name: str = ""
    cgpa: float = 0.0
    is_placed: bool = False
    current_salary: float = 0.0
    companies_applied: int = 0
    dream_offer_amount: float = 0.0
    dream_company_name: str = ""
    eligible: bool = False
    branch: str | None = None
    year: int | None = None
    email: str | None = None
    phone: str | None = None

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )
