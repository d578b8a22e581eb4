"""Program catalog schemas."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class ProgramId(StrEnum):
    """The closed set of programs the system knows about.

    Every member must have a descriptor in the default registry and a rule
    in plaingov.eligibility.rules.
    """

    GST_CREDIT = "gst_credit"
    CCB = "ccb"
    ALBERTA_FAMILY_EMPLOYMENT_TAX_CREDIT = "alberta_family_employment_tax_credit"
    GST_REGISTRATION = "gst_registration"
    PAYROLL_DEDUCTIONS = "payroll_deductions"


class ProgramCategory(StrEnum):
    TAXES = "taxes"
    BENEFITS = "benefits"
    BUSINESS = "business"


class ProgramDescriptor(BaseModel):
    """A pre-approved official source for one program."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    url: str
    jurisdiction: str
    category: ProgramCategory
