"""Live smoke run — every tool against every program, rendered as Markdown.

Usage:
    python -m plaingov.smoke [--output results.md] [--tool NAME ...] [--program ID ...]

Hits the real sources, so results depend on network conditions and on the
sites themselves. Exit status is 1 when any case fails.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel

from plaingov.dispatcher import ToolDispatcher
from plaingov.eligibility import verify_rule_coverage
from plaingov.errors import PlainGovError
from plaingov.registry import build_default_registry
from plaingov.retrieval import DocumentRetriever
from plaingov.schemas.programs import ProgramId
from plaingov.schemas.tools import ToolName

logger = logging.getLogger(__name__)

# Facts that should come back "eligible" for each program
VALID_USER_CONTEXTS: dict[ProgramId, dict[str, Any]] = {
    ProgramId.GST_CREDIT: {"income": 45000, "province": "Canada"},
    ProgramId.CCB: {"income": 65000, "hasChildren": True, "childrenAges": [2, 4], "province": "Canada"},
    ProgramId.ALBERTA_FAMILY_EMPLOYMENT_TAX_CREDIT: {
        "income": 55000,
        "hasChildren": True,
        "childrenAges": [10],
        "province": "Alberta",
    },
    ProgramId.GST_REGISTRATION: {"taxableSupplies": 35000, "province": "Canada"},
    ProgramId.PAYROLL_DEDUCTIONS: {"businessType": "corporation", "province": "Canada"},
}


class SmokeCase(BaseModel):
    tool: ToolName
    program_id: str
    arguments: dict[str, Any]

    @property
    def case_id(self) -> str:
        return f"{self.tool.value}:{self.program_id}"


class SmokeResult(BaseModel):
    case_id: str
    tool: ToolName
    program_id: str
    status: Literal["passed", "failed"]
    error: str | None = None
    duration_ms: int
    timestamp: datetime


def build_cases(
    tools: Iterable[ToolName] | None = None,
    program_ids: Iterable[str] | None = None,
) -> list[SmokeCase]:
    """Cartesian product of tools × programs."""
    cases: list[SmokeCase] = []
    for tool in tools or list(ToolName):
        for program_id in program_ids or [p.value for p in ProgramId]:
            arguments: dict[str, Any] = {"program_id": program_id}
            if tool is ToolName.ELIGIBILITY_CHECK:
                arguments["user_context"] = VALID_USER_CONTEXTS.get(ProgramId(program_id), {})
            cases.append(SmokeCase(tool=tool, program_id=program_id, arguments=arguments))
    return cases


async def run_case(dispatcher: ToolDispatcher, case: SmokeCase) -> SmokeResult:
    """Run one case; a response passes when it is not an error and carries attribution."""
    start = time.monotonic()
    timestamp = datetime.now(UTC)
    error: str | None = None
    try:
        result = await dispatcher.call_tool(case.tool.value, case.arguments)
    except PlainGovError as exc:
        error = f"Protocol error: {exc}"
    else:
        text = result.text
        if not text:
            error = "Empty response"
        elif result.is_error or text.startswith("Error:"):
            error = text[:500]
        elif text.count("Source:") != 1:
            error = "Missing source attribution"

    return SmokeResult(
        case_id=case.case_id,
        tool=case.tool,
        program_id=case.program_id,
        status="failed" if error else "passed",
        error=error,
        duration_ms=int((time.monotonic() - start) * 1000),
        timestamp=timestamp,
    )


async def run_cases(dispatcher: ToolDispatcher, cases: Sequence[SmokeCase]) -> list[SmokeResult]:
    """Run cases one after another to stay polite to the source sites."""
    results: list[SmokeResult] = []
    for case in cases:
        result = await run_case(dispatcher, case)
        logger.info("%s %s (%d ms)", result.status.upper(), result.case_id, result.duration_ms)
        results.append(result)
    return results


def format_results_as_markdown(results: Sequence[SmokeResult], generated_at: datetime | None = None) -> str:
    """Summary, per-tool and per-program breakdowns, then failure details."""
    generated_at = generated_at or datetime.now(UTC)
    total = len(results)
    passed = sum(1 for r in results if r.status == "passed")
    failed = total - passed
    rate = (passed / total * 100) if total else 0.0

    lines = [
        "# Smoke Test Results",
        "",
        f"**Generated:** {generated_at.isoformat()}",
        "",
        "## Summary",
        "",
        f"- **Total Tests:** {total}",
        f"- **Passed:** {passed}",
        f"- **Failed:** {failed}",
        f"- **Success Rate:** {rate:.1f}%",
        "",
        "## Results by Tool",
        "",
    ]
    for tool, group in _group(results, lambda r: r.tool.value).items():
        ok = sum(1 for r in group if r.status == "passed")
        lines += [
            f"### {tool}",
            f"- Passed: {ok}/{len(group)}",
            f"- Programs tested: {', '.join(r.program_id for r in group)}",
            "",
        ]

    lines += ["## Results by Program", ""]
    for program_id, group in _group(results, lambda r: r.program_id).items():
        ok = sum(1 for r in group if r.status == "passed")
        lines += [f"### {program_id}", f"- Passed: {ok}/{len(group)}", ""]

    failures = [r for r in results if r.status == "failed"]
    if failures:
        lines += ["## Failures", ""]
        for r in failures:
            lines += [f"### {r.case_id}", f"- Error: {r.error}", f"- Duration: {r.duration_ms} ms", ""]

    return "\n".join(lines)


def _group(results: Iterable[SmokeResult], key: Callable[[SmokeResult], str]) -> dict[str, list[SmokeResult]]:
    groups: dict[str, list[SmokeResult]] = {}
    for r in results:
        groups.setdefault(key(r), []).append(r)
    return groups


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run every tool against every program source.")
    parser.add_argument("--output", "-o", help="Write the Markdown report to this file")
    parser.add_argument("--tool", action="append", choices=[t.value for t in ToolName])
    parser.add_argument("--program", action="append", choices=[p.value for p in ProgramId])
    return parser.parse_args(argv)


async def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    registry = build_default_registry()
    verify_rule_coverage(registry.list_ids())

    cases = build_cases(
        tools=[ToolName(t) for t in args.tool] if args.tool else None,
        program_ids=args.program,
    )
    async with DocumentRetriever() as retriever:
        results = await run_cases(ToolDispatcher(registry, retriever), cases)

    report = format_results_as_markdown(results)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(report)
        logger.info("Report written to %s", args.output)
    else:
        print(report)

    return 0 if all(r.status == "passed" for r in results) else 1


def cli() -> None:
    from plaingov.main import configure_logging

    configure_logging()
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
