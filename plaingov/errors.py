"""Exception hierarchy.

Only caller-input defects (ToolValidationError, ProgramNotFoundError) reach the
tool boundary as protocol failures. RuleMissingError and RegistryConfigError are
configuration defects and abort startup. Retrieval failures are not exceptions;
see plaingov.schemas.retrieval.
"""

from __future__ import annotations


class PlainGovError(Exception):
    """Base class for all application errors."""


class ToolValidationError(PlainGovError):
    """Tool name or arguments are missing or malformed."""

    def __init__(self, tool: str, message: str) -> None:
        self.tool = tool
        self.message = message
        super().__init__(f"{tool}: {message}")


class ProgramNotFoundError(PlainGovError):
    """Program id is not registered."""

    def __init__(self, program_id: str) -> None:
        self.program_id = program_id
        super().__init__(f"Program {program_id} not found")


class RuleMissingError(PlainGovError):
    """A registered program has no eligibility rule."""

    def __init__(self, program_id: str) -> None:
        self.program_id = program_id
        super().__init__(f"Eligibility rules not found for {program_id}")


class RegistryConfigError(PlainGovError):
    """The program catalog is inconsistent (duplicate id, source off the allow-list)."""
