"""Retrieval outcome — a two-variant result, never both.

Failures are ordinary values: they are rendered to the user, not raised.
"""

from __future__ import annotations

from datetime import date
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class FailureKind(StrEnum):
    HTTP = "http"
    NETWORK = "network"
    TIMEOUT = "timeout"


class RetrievalSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    outcome: Literal["success"] = "success"
    text: str
    verified_on: date  # fetch date (UTC), used verbatim as provenance


class RetrievalFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    outcome: Literal["failure"] = "failure"
    kind: FailureKind
    details: str
    status_code: int | None = None

    @property
    def is_transient(self) -> bool:
        """Network faults, timeouts and 5xx may succeed on a later attempt; 4xx never."""
        if self.kind is FailureKind.HTTP:
            return self.status_code is not None and self.status_code >= 500
        return True


RetrievalOutcome = Annotated[
    RetrievalSuccess | RetrievalFailure,
    Field(discriminator="outcome"),
]
