"""Public and inspection projections of a Blip error record."""

from __future__ import annotations

from typing import Any
from typing import TextIO
import sys

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from blip.core.record import ERROR_KIND
from blip.core.record import ErrorRecord


class PublicError(BaseModel):
    """API-safe error body: message and status code only."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    message: str
    status_code: int = Field(alias="statusCode")

    @classmethod
    def from_record(cls, record: ErrorRecord) -> PublicError:
        return cls(message=record.message, status_code=record.status_code)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class CausalErrorSummary(BaseModel):
    """Root cause as shown in logs; the stack is left out to avoid printing it twice."""

    model_config = ConfigDict(frozen=True)

    name: str
    message: str


class InspectionError(BaseModel):
    """Verbose error view for server-side logging and debugging.

    Never return this from a public endpoint: it carries ``data``, the full
    stack and a summary of the root cause.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status_code: int = Field(alias="statusCode")
    server: bool
    data: Any = None
    stack: str
    message: str
    causal_error: CausalErrorSummary | None = Field(default=None, alias="causalError")

    @classmethod
    def from_record(cls, record: ErrorRecord) -> InspectionError:
        causal_error = None
        if record.causal_error is not None:
            causal_error = CausalErrorSummary(
                name=record.causal_error.name,
                message=record.causal_error.message,
            )
        return cls(
            status_code=record.status_code,
            server=record.server,
            data=record.data,
            stack=record.stack,
            message=record.message,
            causal_error=causal_error,
        )

    @property
    def name(self) -> str:
        return ERROR_KIND

    def to_dict(self) -> dict[str, Any]:
        """Return the debug shape, omitting ``causalError`` when there is no root cause."""
        exclude = {"causal_error"} if self.causal_error is None else None
        return self.model_dump(by_alias=True, exclude=exclude)

    def render(self, stream: TextIO | None = None) -> InspectionError:
        """Write the ``<Kind>: <message>:`` header to ``stream`` and return this view.

        This has an observable side effect: the header line is written every
        time it is called. ``stream`` defaults to ``sys.stdout``.
        """
        print(f"{self.name}: {self.message}:", file=stream if stream is not None else sys.stdout)
        return self
