"""Tool boundary schemas — argument models, tool catalog entries and results."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from plaingov.schemas.eligibility import UserFacts


class ToolName(StrEnum):
    EXPLAIN_PROGRAM = "explain_program"
    GET_ELIGIBILITY_CRITERIA = "get_eligibility_criteria"
    ELIGIBILITY_CHECK = "eligibility_check"
    GENERATE_CHECKLIST = "generate_checklist"
    TIMELINE = "timeline"
    QUESTIONS_FOR_PROFESSIONAL = "questions_for_professional"


class ProgramArgs(BaseModel):
    """Arguments shared by every content-only tool."""

    model_config = ConfigDict(extra="ignore")

    program_id: StrictStr


class EligibilityCheckArgs(ProgramArgs):
    user_context: UserFacts


class ToolSpec(BaseModel):
    """One entry of the published tool catalog."""

    model_config = ConfigDict(populate_by_name=True)

    name: ToolName
    description: str
    input_schema: dict[str, Any] = Field(serialization_alias="inputSchema")


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """A single text payload, success or downgraded error alike."""

    content: list[TextContent]
    is_error: bool = Field(default=False, serialization_alias="isError")

    @classmethod
    def from_text(cls, text: str, *, is_error: bool = False) -> ToolResult:
        return cls(content=[TextContent(text=text)], is_error=is_error)

    @property
    def text(self) -> str:
        return "\n".join(part.text for part in self.content)
