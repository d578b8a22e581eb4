"""Async httpx retriever for pre-approved official source pages.

No cache: every call fetches the live page so the verification date is
always the date of this retrieval.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, date, datetime

import httpx

from plaingov.config import settings
from plaingov.retrieval.extract import extract_text
from plaingov.schemas.retrieval import FailureKind, RetrievalFailure, RetrievalOutcome, RetrievalSuccess

logger = logging.getLogger(__name__)


def _utc_today() -> date:
    return datetime.now(UTC).date()


class DocumentRetriever:
    """Fetch a source URL and turn it into extracted text or a failure value.

    Failure policy:
        non-2xx status      → kind=http     ("HTTP 404: Not Found")
        transport fault     → kind=network  (exception message)
        budget exceeded     → kind=timeout  (request cancelled)

    Transient failures (network, timeout, HTTP 5xx) are retried up to
    ``max_retries`` times with exponential backoff. HTTP 4xx is final.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_base: float | None = None,
        today: Callable[[], date] = _utc_today,
    ) -> None:
        cfg = settings.retrieval
        self._timeout = timeout if timeout is not None else cfg.fetch_timeout
        self._max_retries = max_retries if max_retries is not None else cfg.fetch_max_retries
        self._backoff_base = backoff_base if backoff_base is not None else cfg.fetch_backoff_base
        self._today = today
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout, connect=cfg.fetch_connect_timeout),
            follow_redirects=True,
            headers={"User-Agent": cfg.user_agent},
        )

    async def retrieve(self, url: str) -> RetrievalOutcome:
        """Fetch ``url`` once (plus any transient retries) and extract its text."""
        attempt = 0
        while True:
            outcome = await self._fetch_once(url)
            if isinstance(outcome, RetrievalSuccess):
                return outcome
            if not outcome.is_transient or attempt >= self._max_retries:
                logger.warning("Retrieval failed for %s: %s (%s)", url, outcome.details, outcome.kind.value)
                return outcome

            delay = self._backoff_base * (2 ** attempt)
            attempt += 1
            logger.info(
                "Transient retrieval failure for %s (%s), retry %d/%d in %.2fs",
                url,
                outcome.kind.value,
                attempt,
                self._max_retries,
                delay,
            )
            await asyncio.sleep(delay)

    async def _fetch_once(self, url: str) -> RetrievalOutcome:
        try:
            async with asyncio.timeout(self._timeout):
                response = await self._client.get(url)
        except (TimeoutError, httpx.TimeoutException):
            return RetrievalFailure(
                kind=FailureKind.TIMEOUT,
                details=f"Timed out after {self._timeout:g}s",
            )
        except httpx.HTTPError as exc:
            return RetrievalFailure(
                kind=FailureKind.NETWORK,
                details=str(exc) or type(exc).__name__,
            )

        if not response.is_success:
            return RetrievalFailure(
                kind=FailureKind.HTTP,
                details=f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )

        text = extract_text(response.text)
        verified_on = self._today()
        logger.info("Retrieved %s (%d chars, verified %s)", url, len(text), verified_on.isoformat())
        return RetrievalSuccess(text=text, verified_on=verified_on)

    async def close(self) -> None:
        """Close the HTTP client if this retriever created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> DocumentRetriever:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
