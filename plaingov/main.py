"""FastAPI application entry point — wires everything together.

Usage:
    python -m plaingov.main

Exposes the tool boundary over HTTP:
    GET  /health         liveness + registry size
    GET  /tools          tool catalog with JSON input schemas
    POST /tools/{name}   run one tool; body is the arguments object
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog
import uvicorn
from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse

from plaingov import __version__
from plaingov.config import settings
from plaingov.dispatcher import ToolDispatcher
from plaingov.eligibility import verify_rule_coverage
from plaingov.errors import ProgramNotFoundError, ToolValidationError
from plaingov.registry import build_default_registry
from plaingov.retrieval import DocumentRetriever

logger = logging.getLogger(__name__)


# ── Logging setup ────────────────────────────────────────────────────


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(getattr(logging, settings.log_level))
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


configure_logging()


# ── Application factory ──────────────────────────────────────────────


def create_app(dispatcher: ToolDispatcher | None = None) -> FastAPI:
    """Build the app.

    With no dispatcher, the lifespan builds the default registry and a live
    retriever, and closes the retriever on shutdown. Tests pass their own.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        if dispatcher is not None:
            app.state.dispatcher = dispatcher
            yield
            return

        logger.info("Starting PlainGov (env=%s)", settings.environment)
        registry = build_default_registry()
        verify_rule_coverage(registry.list_ids())
        logger.info("Eligibility rules verified for %d programs", len(registry))

        async with DocumentRetriever() as retriever:
            app.state.dispatcher = ToolDispatcher(registry, retriever)
            try:
                yield
            finally:
                logger.info("Shutting down PlainGov...")
        logger.info("PlainGov shutdown complete")

    app = FastAPI(
        title="PlainGov",
        description="Retrieval-first answers about Canadian tax and benefit programs",
        version=__version__,
        lifespan=lifespan,
    )

    @app.exception_handler(ToolValidationError)
    async def _validation_failed(request: Request, exc: ToolValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.message})

    @app.exception_handler(ProgramNotFoundError)
    async def _program_not_found(request: Request, exc: ProgramNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.get("/health")
    async def health_check(request: Request) -> dict[str, Any]:
        """Health check endpoint."""
        return {
            "status": "ok",
            "environment": settings.environment,
            "programs": len(request.app.state.dispatcher.registry),
        }

    @app.get("/tools")
    async def list_tools(request: Request) -> dict[str, Any]:
        specs = request.app.state.dispatcher.list_tools()
        return {"tools": [spec.model_dump(mode="json", by_alias=True) for spec in specs]}

    @app.post("/tools/{name}")
    async def call_tool(
        name: str,
        request: Request,
        arguments: Any = Body(default=None),
    ) -> dict[str, Any]:
        result = await request.app.state.dispatcher.call_tool(name, arguments)
        return result.model_dump(mode="json", by_alias=True)

    return app


app = create_app()


# ── Entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    uvicorn.run(
        "plaingov.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
