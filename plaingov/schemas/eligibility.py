"""Pydantic schemas for the eligibility engine.

Pure data classes — no network, no I/O.
UserFacts arrives in camelCase from the tool boundary; every field is optional
and absence means "unknown", never false or zero.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EligibilityStatus(StrEnum):
    ELIGIBLE = "eligible"
    NOT_ELIGIBLE = "not_eligible"
    UNCLEAR = "unclear"


class UserFacts(BaseModel):
    """Self-reported facts supplied with one eligibility check.

    Strict: "45000" is not an income and 1 is not a bool.
    NaN and infinity are rejected in every numeric field.
    Unknown keys are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
        allow_inf_nan=False,
        frozen=True,
        extra="ignore",
    )

    income: float | None = None
    family_size: float | None = None
    has_children: bool | None = None
    children_ages: list[float] | None = None
    province: str | None = None
    business_type: str | None = None
    taxable_supplies: float | None = None

    def field_label(self, name: str) -> str:
        """Wire name of a field, as reported in missing-info lists."""
        return type(self).model_fields[name].alias or name


class EligibilityVerdict(BaseModel):
    """Tri-state outcome of a single rule evaluation."""

    model_config = ConfigDict(frozen=True)

    status: EligibilityStatus
    reasons: list[str] = Field(default_factory=list)
    missing_info: list[str] = Field(default_factory=list)

    @classmethod
    def unclear(cls, missing: list[str]) -> EligibilityVerdict:
        return cls(status=EligibilityStatus.UNCLEAR, missing_info=missing)

    @classmethod
    def not_eligible(cls, reason: str) -> EligibilityVerdict:
        return cls(status=EligibilityStatus.NOT_ELIGIBLE, reasons=[reason])

    @classmethod
    def eligible(cls) -> EligibilityVerdict:
        return cls(status=EligibilityStatus.ELIGIBLE)
