"""Tool catalog — descriptions, per-tool instructions and input schemas.

The ``program_id`` enum in every schema is built from the registry, so the
published choices always match what the dispatcher can resolve.
"""

from __future__ import annotations

from typing import Any

from plaingov.registry import ProgramRegistry
from plaingov.schemas.eligibility import UserFacts
from plaingov.schemas.tools import ToolName, ToolSpec

TOOL_DESCRIPTIONS: dict[ToolName, str] = {
    ToolName.EXPLAIN_PROGRAM: "Get plain-language explanation of a government program",
    ToolName.GET_ELIGIBILITY_CRITERIA: "Get eligibility criteria for a program",
    ToolName.ELIGIBILITY_CHECK: "Check eligibility for a program based on user context",
    ToolName.GENERATE_CHECKLIST: "Generate a step-by-step checklist for applying to a program",
    ToolName.TIMELINE: "Get key dates and deadlines for a program",
    ToolName.QUESTIONS_FOR_PROFESSIONAL: "Get questions to ask a professional about a program",
}

# Instruction shown above the retrieved text for content-only tools
TOOL_INSTRUCTIONS: dict[ToolName, str] = {
    ToolName.EXPLAIN_PROGRAM: (
        "Provide a clear, plain-language explanation of this government program. "
        "Include: 1) What the program is, 2) Who it's for, 3) Key benefits, "
        "4) Important deadlines or requirements. Keep it concise and easy to understand."
    ),
    ToolName.GET_ELIGIBILITY_CRITERIA: (
        "Extract and list all eligibility criteria for this program. "
        "Format as a clear, numbered list. Include income thresholds, residency "
        "requirements, age requirements, and any other qualifying conditions "
        "mentioned in the text."
    ),
    ToolName.GENERATE_CHECKLIST: (
        "Create a step-by-step checklist for applying to this program. "
        "Format as a numbered list with clear action items. Include: "
        "1) Documents to gather, 2) Forms to complete, 3) Where to submit, "
        "4) What to expect next."
    ),
    ToolName.TIMELINE: (
        "Extract all key dates, deadlines, and timeline information for this program. "
        "Include: application deadlines, payment dates, renewal dates, and any "
        "consequences of missing deadlines. Format as a clear timeline."
    ),
    ToolName.QUESTIONS_FOR_PROFESSIONAL: (
        "Based on this program information, generate 5-7 specific questions someone "
        "should ask a tax professional, accountant, or government service representative. "
        "Focus on clarifying complex aspects, understanding personal eligibility, and "
        "optimizing their situation within legal bounds."
    ),
}


def _program_id_schema(registry: ProgramRegistry, description: str) -> dict[str, Any]:
    return {"type": "string", "enum": registry.list_ids(), "description": description}


def _user_context_schema() -> dict[str, Any]:
    schema = UserFacts.model_json_schema(by_alias=True)
    schema.pop("title", None)
    return schema


def build_tool_specs(registry: ProgramRegistry) -> list[ToolSpec]:
    """Catalog entries for every tool, in a stable order."""
    specs: list[ToolSpec] = []
    for tool in ToolName:
        properties: dict[str, Any] = {
            "program_id": _program_id_schema(registry, "ID of the program"),
        }
        required = ["program_id"]
        if tool is ToolName.ELIGIBILITY_CHECK:
            properties["program_id"] = _program_id_schema(registry, "ID of the program to check")
            properties["user_context"] = _user_context_schema()
            required.append("user_context")
        specs.append(ToolSpec(
            name=tool,
            description=TOOL_DESCRIPTIONS[tool],
            input_schema={"type": "object", "properties": properties, "required": required},
        ))
    return specs
