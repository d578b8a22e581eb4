"""Eligibility engine — closed, rule-based tri-state classification per program."""

from plaingov.eligibility.engine import evaluate, rule_for, verify_rule_coverage
from plaingov.schemas.eligibility import EligibilityStatus, EligibilityVerdict, UserFacts

__all__ = [
    "evaluate",
    "rule_for",
    "verify_rule_coverage",
    "EligibilityStatus",
    "EligibilityVerdict",
    "UserFacts",
]
