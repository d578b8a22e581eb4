"""Tests for the smoke harness (case building, pass/fail judgement, report)."""

from __future__ import annotations

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock

import pytest

from plaingov.dispatcher import ToolDispatcher
from plaingov.registry import build_default_registry
from plaingov.schemas.retrieval import FailureKind, RetrievalFailure, RetrievalSuccess
from plaingov.schemas.tools import ToolName
from plaingov.smoke import SmokeCase, build_cases, format_results_as_markdown, run_case, run_cases

ALLOWED = frozenset({"www.canada.ca", "www.alberta.ca"})


def _dispatcher(outcome) -> ToolDispatcher:
    retriever = AsyncMock()
    retriever.retrieve = AsyncMock(return_value=outcome)
    return ToolDispatcher(build_default_registry(ALLOWED), retriever)


class TestBuildCases:
    def test_full_matrix(self):
        cases = build_cases()
        assert len(cases) == 6 * 5
        assert len({c.case_id for c in cases}) == 30

    def test_eligibility_cases_carry_context(self):
        cases = build_cases(tools=[ToolName.ELIGIBILITY_CHECK], program_ids=["ccb"])
        assert cases[0].arguments["user_context"]["childrenAges"] == [2, 4]


class TestRunCase:
    @pytest.mark.asyncio()
    async def test_all_pass_against_healthy_sources(self):
        dispatcher = _dispatcher(RetrievalSuccess(text="ok", verified_on=date(2026, 1, 1)))
        results = await run_cases(dispatcher, build_cases())
        assert all(r.status == "passed" for r in results)

    @pytest.mark.asyncio()
    async def test_retrieval_error_fails(self):
        dispatcher = _dispatcher(RetrievalFailure(kind=FailureKind.HTTP, details="HTTP 404: Not Found"))
        result = await run_case(dispatcher, build_cases(program_ids=["ccb"])[0])
        assert result.status == "failed"
        assert result.error.startswith("Error: Retrieval failed")

    @pytest.mark.asyncio()
    async def test_protocol_error_fails(self):
        dispatcher = _dispatcher(RetrievalSuccess(text="ok", verified_on=date(2026, 1, 1)))
        case = SmokeCase(tool=ToolName.TIMELINE, program_id="ccb", arguments={})
        result = await run_case(dispatcher, case)
        assert result.status == "failed"
        assert result.error.startswith("Protocol error")


class TestMarkdownReport:
    @pytest.mark.asyncio()
    async def test_summary_and_failures(self):
        dispatcher = _dispatcher(RetrievalFailure(kind=FailureKind.NETWORK, details="boom"))
        results = await run_cases(dispatcher, build_cases(tools=[ToolName.TIMELINE], program_ids=["ccb"]))

        report = format_results_as_markdown(results, generated_at=datetime(2026, 1, 1, tzinfo=UTC))

        assert "**Generated:** 2026-01-01T00:00:00+00:00" in report
        assert "- **Total Tests:** 1" in report
        assert "- **Success Rate:** 0.0%" in report
        assert "### timeline" in report
        assert "## Failures" in report
        assert "- Error: Error: Retrieval failed - boom" in report

    def test_empty_results(self):
        report = format_results_as_markdown([])
        assert "- **Success Rate:** 0.0%" in report
        assert "## Failures" not in report
