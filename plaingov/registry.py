"""Pre-approved source registry.

Built once at startup and passed into the dispatcher; read-only afterwards,
so concurrent tool calls share it without locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from types import MappingProxyType
from urllib.parse import urlsplit

from plaingov.config import settings
from plaingov.errors import ProgramNotFoundError, RegistryConfigError
from plaingov.schemas.programs import ProgramCategory, ProgramDescriptor, ProgramId

logger = logging.getLogger(__name__)

DEFAULT_PROGRAMS: tuple[ProgramDescriptor, ...] = (
    ProgramDescriptor(
        id=ProgramId.GST_CREDIT,
        name="GST/HST Credit",
        url=(
            "https://www.canada.ca/en/revenue-agency/services/child-family-benefits/"
            "goods-services-tax-harmonized-sales-tax-gst-hst-credit.html"
        ),
        jurisdiction="Canada",
        category=ProgramCategory.TAXES,
    ),
    ProgramDescriptor(
        id=ProgramId.CCB,
        name="Canada Child Benefit",
        url=(
            "https://www.canada.ca/en/revenue-agency/services/child-family-benefits/"
            "canada-child-benefit-overview.html"
        ),
        jurisdiction="Canada",
        category=ProgramCategory.BENEFITS,
    ),
    ProgramDescriptor(
        id=ProgramId.ALBERTA_FAMILY_EMPLOYMENT_TAX_CREDIT,
        name="Alberta Family Employment Tax Credit",
        url="https://www.alberta.ca/alberta-family-employment-tax-credit.aspx",
        jurisdiction="Alberta",
        category=ProgramCategory.TAXES,
    ),
    ProgramDescriptor(
        id=ProgramId.GST_REGISTRATION,
        name="GST/HST Registration for Small Business",
        url=(
            "https://www.canada.ca/en/revenue-agency/services/tax/businesses/topics/"
            "gst-hst-businesses/when-register-charge.html"
        ),
        jurisdiction="Canada",
        category=ProgramCategory.BUSINESS,
    ),
    ProgramDescriptor(
        id=ProgramId.PAYROLL_DEDUCTIONS,
        name="Payroll Deductions for Small Business",
        url=(
            "https://www.canada.ca/en/revenue-agency/services/tax/businesses/topics/"
            "payroll/payroll-overview.html"
        ),
        jurisdiction="Canada",
        category=ProgramCategory.BUSINESS,
    ),
)


class ProgramRegistry:
    """Immutable id → ProgramDescriptor lookup table."""

    def __init__(
        self,
        programs: Iterable[ProgramDescriptor],
        allowed_hosts: frozenset[str] | None = None,
    ) -> None:
        hosts = allowed_hosts if allowed_hosts is not None else settings.retrieval.allowed_hosts
        table: dict[str, ProgramDescriptor] = {}
        for program in programs:
            if program.id in table:
                msg = f"Duplicate program id: {program.id}"
                raise RegistryConfigError(msg)
            _check_source_url(program, hosts)
            table[program.id] = program
        self._programs = MappingProxyType(table)

    def lookup(self, program_id: str) -> ProgramDescriptor:
        """Return the descriptor for a registered id.

        Raises:
            ProgramNotFoundError: If the id is not registered.
        """
        try:
            return self._programs[program_id]
        except KeyError:
            raise ProgramNotFoundError(program_id) from None

    def list_ids(self) -> list[str]:
        """Registered ids in registration order (the tool-level enum)."""
        return list(self._programs)

    def __len__(self) -> int:
        return len(self._programs)


def _check_source_url(program: ProgramDescriptor, allowed_hosts: frozenset[str]) -> None:
    """Reject sources that are not https on an allow-listed host."""
    parts = urlsplit(program.url)
    host = (parts.hostname or "").lower()
    if parts.scheme != "https" or host not in allowed_hosts:
        msg = f"Source for {program.id} is not on the allow-list: {program.url}"
        raise RegistryConfigError(msg)


def build_default_registry(allowed_hosts: frozenset[str] | None = None) -> ProgramRegistry:
    """Registry of the five built-in programs."""
    registry = ProgramRegistry(DEFAULT_PROGRAMS, allowed_hosts=allowed_hosts)
    logger.info("Program registry loaded with %d programs", len(registry))
    return registry
