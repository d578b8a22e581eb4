"""Eligibility engine — resolves a program id to its rule and evaluates it.

Pure Python orchestrator. No network access, no retrieved text.
The dispatcher fetches the source page separately and shows it alongside the verdict.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from plaingov.eligibility.rules import (
    check_alberta_family_employment_tax_credit,
    check_ccb,
    check_gst_credit,
    check_gst_registration,
    check_payroll_deductions,
)
from plaingov.errors import RuleMissingError
from plaingov.schemas.eligibility import EligibilityVerdict, UserFacts
from plaingov.schemas.programs import ProgramId

logger = logging.getLogger(__name__)

Rule = Callable[[UserFacts], EligibilityVerdict]


def rule_for(program_id: str) -> Rule:
    """Return the rule function for a program.

    Raises:
        RuleMissingError: If the id has no rule. This is a configuration
            defect, never a user-facing condition.
    """
    try:
        program = ProgramId(program_id)
    except ValueError:
        raise RuleMissingError(program_id) from None

    match program:
        case ProgramId.GST_CREDIT:
            return check_gst_credit
        case ProgramId.CCB:
            return check_ccb
        case ProgramId.ALBERTA_FAMILY_EMPLOYMENT_TAX_CREDIT:
            return check_alberta_family_employment_tax_credit
        case ProgramId.GST_REGISTRATION:
            return check_gst_registration
        case ProgramId.PAYROLL_DEDUCTIONS:
            return check_payroll_deductions
        case _:
            raise RuleMissingError(program_id)


def evaluate(program_id: str, facts: UserFacts) -> EligibilityVerdict:
    """Evaluate one program against the supplied facts."""
    verdict = rule_for(program_id)(facts)
    logger.debug(
        "Eligibility evaluated: program=%s status=%s missing=%s",
        program_id,
        verdict.status.value,
        verdict.missing_info,
    )
    return verdict


def verify_rule_coverage(program_ids: Iterable[str]) -> None:
    """Fail fast at startup if any registered program lacks a rule."""
    for program_id in program_ids:
        rule_for(program_id)
