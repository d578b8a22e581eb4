"""Per-program eligibility rule functions.

Each function takes UserFacts and returns an EligibilityVerdict. Pure Python,
deterministic, and independent of any retrieved page.

Every rule runs the same three phases:
  1. completeness — every absent required fact, in declared order → UNCLEAR
  2. categorical  — jurisdiction gate → NOT_ELIGIBLE on first failure
  3. threshold    — hard-coded conservative cutoffs → NOT_ELIGIBLE on first failure

Cutoffs are exclusive: a value equal to the cutoff passes.
"""

from __future__ import annotations

from plaingov.schemas.eligibility import EligibilityVerdict, UserFacts

# ── Thresholds ─────────────────────────────────────────────────────────────
# Conservative approximations of the published rules, not the rules themselves.

GST_CREDIT_INCOME_CEILING = 55_000          # income above this ⇒ "may be too high"
CCB_INCOME_CEILING = 70_000
CCB_CHILD_AGE_LIMIT = 6                     # at least one child strictly younger
AFETC_INCOME_CEILING = 60_000
AFETC_CHILD_AGE_LIMIT = 18
GST_REGISTRATION_SMALL_SUPPLIER_LIMIT = 30_000  # supplies at or below ⇒ small supplier

# ── Jurisdictions ──────────────────────────────────────────────────────────

_CANADIAN_JURISDICTIONS = frozenset({
    "canada", "ca",
    "alberta", "ab",
    "british columbia", "bc",
    "manitoba", "mb",
    "new brunswick", "nb",
    "newfoundland and labrador", "nl",
    "nova scotia", "ns",
    "ontario", "on",
    "prince edward island", "pe",
    "quebec", "québec", "qc",
    "saskatchewan", "sk",
    "northwest territories", "nt",
    "nunavut", "nu",
    "yukon", "yt",
})
_ALBERTA = frozenset({"alberta", "ab"})

RESIDENT_OF_CANADA = "Must be resident of Canada"
RESIDENT_OF_ALBERTA = "Must be resident of Alberta"
OPERATES_IN_CANADA = "Business must operate in Canada"
INCOME_TOO_HIGH = "Income may be too high"


def _normalize(place: str) -> str:
    return " ".join(place.split()).casefold()


def _in_canada(province: str) -> bool:
    return _normalize(province) in _CANADIAN_JURISDICTIONS


def _in_alberta(province: str) -> bool:
    return _normalize(province) in _ALBERTA


def _missing(facts: UserFacts, *required: str) -> list[str]:
    """Wire names of every required field that is absent, in the given order."""
    return [facts.field_label(name) for name in required if getattr(facts, name) is None]


def _has_child_under(facts: UserFacts, age_limit: int) -> bool:
    return bool(facts.has_children) and any(age < age_limit for age in facts.children_ages or [])


# ── GST/HST Credit ─────────────────────────────────────────────────────────


def check_gst_credit(facts: UserFacts) -> EligibilityVerdict:
    missing = _missing(facts, "income", "province")
    if missing:
        return EligibilityVerdict.unclear(missing)

    if not _in_canada(facts.province):
        return EligibilityVerdict.not_eligible(RESIDENT_OF_CANADA)

    if facts.income > GST_CREDIT_INCOME_CEILING:
        return EligibilityVerdict.not_eligible(INCOME_TOO_HIGH)
    return EligibilityVerdict.eligible()


# ── Canada Child Benefit ───────────────────────────────────────────────────


def check_ccb(facts: UserFacts) -> EligibilityVerdict:
    missing = _missing(facts, "has_children", "children_ages", "income", "province")
    if missing:
        return EligibilityVerdict.unclear(missing)

    if not _in_canada(facts.province):
        return EligibilityVerdict.not_eligible(RESIDENT_OF_CANADA)

    if not _has_child_under(facts, CCB_CHILD_AGE_LIMIT):
        return EligibilityVerdict.not_eligible(f"Must have children under {CCB_CHILD_AGE_LIMIT}")
    if facts.income > CCB_INCOME_CEILING:
        return EligibilityVerdict.not_eligible(INCOME_TOO_HIGH)
    return EligibilityVerdict.eligible()


# ── Alberta Family Employment Tax Credit ───────────────────────────────────


def check_alberta_family_employment_tax_credit(facts: UserFacts) -> EligibilityVerdict:
    missing = _missing(facts, "has_children", "children_ages", "income", "province")
    if missing:
        return EligibilityVerdict.unclear(missing)

    # Residency runs before any threshold, so a non-Albertan is rejected on
    # residency even when the income would also fail.
    if not _in_alberta(facts.province):
        return EligibilityVerdict.not_eligible(RESIDENT_OF_ALBERTA)

    if not _has_child_under(facts, AFETC_CHILD_AGE_LIMIT):
        return EligibilityVerdict.not_eligible(f"Must have children under {AFETC_CHILD_AGE_LIMIT}")
    if facts.income > AFETC_INCOME_CEILING:
        return EligibilityVerdict.not_eligible(INCOME_TOO_HIGH)
    return EligibilityVerdict.eligible()


# ── GST/HST Registration ───────────────────────────────────────────────────


def check_gst_registration(facts: UserFacts) -> EligibilityVerdict:
    """Here "eligible" means the business must register."""
    missing = _missing(facts, "taxable_supplies", "province")
    if missing:
        return EligibilityVerdict.unclear(missing)

    if not _in_canada(facts.province):
        return EligibilityVerdict.not_eligible(OPERATES_IN_CANADA)

    if facts.taxable_supplies <= GST_REGISTRATION_SMALL_SUPPLIER_LIMIT:
        return EligibilityVerdict.not_eligible("Taxable supplies too low")
    return EligibilityVerdict.eligible()


# ── Payroll Deductions ─────────────────────────────────────────────────────


def check_payroll_deductions(facts: UserFacts) -> EligibilityVerdict:
    """Any stated business type operating in Canada qualifies; no thresholds."""
    missing = _missing(facts, "business_type", "province")
    if missing:
        return EligibilityVerdict.unclear(missing)

    if not _in_canada(facts.province):
        return EligibilityVerdict.not_eligible(OPERATES_IN_CANADA)
    return EligibilityVerdict.eligible()
