"""HTTP-friendly errors that are safe to return from public APIs."""

from blip.core.errors import BlipError
from blip.core.record import ERROR_KIND
from blip.core.status import InvalidStatusCode
from blip.schemas.error import CausalErrorSummary
from blip.schemas.error import InspectionError
from blip.schemas.error import PublicError

__all__ = [
    "BlipError",
    "CausalErrorSummary",
    "ERROR_KIND",
    "InspectionError",
    "InvalidStatusCode",
    "PublicError",
]
