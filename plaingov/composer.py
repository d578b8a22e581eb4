"""Response composer — the single text blob returned for every tool call.

Attribution invariant: every non-error response ends with exactly one
``Source: <url> (last verified <YYYY-MM-DD>)`` line; error responses never
carry one, since nothing was retrieved.
"""

from __future__ import annotations

from plaingov.schemas.eligibility import EligibilityVerdict
from plaingov.schemas.programs import ProgramDescriptor
from plaingov.schemas.retrieval import RetrievalFailure, RetrievalSuccess

RETRIEVAL_ERROR_CATEGORY = "Retrieval failed"

DISCLAIMER = "This is not advice. Consult official sources for definitive eligibility."


def attribution(program: ProgramDescriptor, retrieval: RetrievalSuccess) -> str:
    return f"Source: {program.url} (last verified {retrieval.verified_on.isoformat()})"


def _neutralize_attribution(text: str) -> str:
    """Rewrite "Source:" labels in page text so only the attribution line carries one."""
    return text.replace("Source:", "Source -")


def compose_error(category: str, details: str) -> str:
    return f"Error: {category} - {details}"


def compose_failure(failure: RetrievalFailure) -> str:
    """Retrieval failure → user-visible error text without attribution."""
    return compose_error(RETRIEVAL_ERROR_CATEGORY, failure.details)


def compose_content(
    program: ProgramDescriptor,
    retrieval: RetrievalSuccess,
    instruction: str,
) -> str:
    """Retrieved text wrapped with the tool's instruction, plus attribution."""
    return (
        f"**Instruction:** {instruction}\n\n"
        f"**Retrieved Information:**\n\n"
        f"{_neutralize_attribution(retrieval.text)}\n\n"
        f"{attribution(program, retrieval)}"
    )


def compose_verdict(
    program: ProgramDescriptor,
    retrieval: RetrievalSuccess,
    verdict: EligibilityVerdict,
) -> str:
    """Fixed-structure eligibility block.

    The verdict comes from the rule table, not from the retrieved page; the
    page only supplies provenance here.
    """
    reasons = ", ".join(verdict.reasons) or "None"
    missing = ", ".join(verdict.missing_info) or "None"
    return (
        f"Eligibility Status: {verdict.status.value}\n\n"
        f"Reasons: {reasons}\n\n"
        f"Missing Information: {missing}\n\n"
        f"{DISCLAIMER}\n\n"
        f"{attribution(program, retrieval)}"
    )
