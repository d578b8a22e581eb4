"""Tool dispatcher — one request through Validate → Resolve → Retrieve → (Evaluate) → Compose.

Caller defects (bad tool name, malformed arguments, unknown program) raise and
become protocol-level failures at the boundary. Everything after a request is
validated and resolved is downgraded to text so a flaky source never aborts
the call. RuleMissingError is a deployment defect and propagates.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

import structlog
from pydantic import ValidationError

from plaingov.composer import compose_content, compose_error, compose_failure, compose_verdict
from plaingov.eligibility import evaluate
from plaingov.errors import ToolValidationError
from plaingov.registry import ProgramRegistry
from plaingov.schemas.retrieval import RetrievalFailure, RetrievalOutcome
from plaingov.schemas.tools import EligibilityCheckArgs, ProgramArgs, ToolName, ToolResult, ToolSpec
from plaingov.tools import TOOL_INSTRUCTIONS, build_tool_specs

logger = structlog.get_logger(__name__)


class Retriever(Protocol):
    async def retrieve(self, url: str) -> RetrievalOutcome: ...


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error["loc"]) or "arguments"
        parts.append(f"{loc}: {error['msg']}")
    return "; ".join(parts)


class ToolDispatcher:
    """Routes tool invocations to the registry, retriever, engine and composer."""

    def __init__(self, registry: ProgramRegistry, retriever: Retriever) -> None:
        self._registry = registry
        self._retriever = retriever
        self._specs = build_tool_specs(registry)

    @property
    def registry(self) -> ProgramRegistry:
        return self._registry

    def list_tools(self) -> list[ToolSpec]:
        return list(self._specs)

    def _validate(self, name: str, arguments: Mapping[str, Any] | None) -> tuple[ToolName, ProgramArgs]:
        try:
            tool = ToolName(name)
        except ValueError:
            raise ToolValidationError(name, f"Unknown tool: {name}") from None

        if not isinstance(arguments, Mapping):
            raise ToolValidationError(name, "Arguments are required")

        model = EligibilityCheckArgs if tool is ToolName.ELIGIBILITY_CHECK else ProgramArgs
        try:
            args = model.model_validate(dict(arguments))
        except ValidationError as exc:
            raise ToolValidationError(name, _format_validation_error(exc)) from exc
        return tool, args

    async def call_tool(self, name: str, arguments: Mapping[str, Any] | None) -> ToolResult:
        """Run one tool invocation.

        Raises:
            ToolValidationError: Unknown tool, missing or malformed arguments.
            ProgramNotFoundError: program_id is not registered.
            RuleMissingError: A registered program has no eligibility rule.
        """
        log = logger.bind(tool=name)
        tool, args = self._validate(name, arguments)
        log = log.bind(program_id=args.program_id)

        program = self._registry.lookup(args.program_id)

        try:
            retrieval = await self._retriever.retrieve(program.url)
        except Exception as exc:
            log.exception("retrieval_crashed")
            return ToolResult.from_text(compose_error("Processing failed", type(exc).__name__), is_error=True)

        if isinstance(retrieval, RetrievalFailure):
            log.warning("retrieval_failed", kind=retrieval.kind.value, details=retrieval.details)
            return ToolResult.from_text(compose_failure(retrieval), is_error=True)

        if tool is ToolName.ELIGIBILITY_CHECK:
            assert isinstance(args, EligibilityCheckArgs)  # noqa: S101
            verdict = evaluate(program.id, args.user_context)
            log.info("eligibility_checked", status=verdict.status.value)
            text = compose_verdict(program, retrieval, verdict)
        else:
            text = compose_content(program, retrieval, TOOL_INSTRUCTIONS[tool])
            log.info("content_composed", chars=len(retrieval.text))

        return ToolResult.from_text(text)
