"""HTTP status code validation for Blip errors."""

from __future__ import annotations

from numbers import Integral
from numbers import Real
import logging
import math

logger = logging.getLogger(__name__)

DEFAULT_STATUS_CODE = 500
MIN_STATUS_CODE = 100
MAX_STATUS_CODE = 599
SERVER_ERROR_THRESHOLD = 500


class InvalidStatusCode(ValueError):
    """Raised when a provided status code falls outside 100-599."""

    def __init__(self, status_code: Real) -> None:
        super().__init__(f"Invalid status code: {status_code}")
        self.status_code = status_code


def resolve_status_code(value: Real | None) -> int:
    """Return the status code to use, defaulting missing or NaN values to 500."""
    if value is None:
        return DEFAULT_STATUS_CODE
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"status_code must be a number, got {type(value).__name__}")
    if not isinstance(value, Integral) and math.isnan(value):
        return DEFAULT_STATUS_CODE

    if not MIN_STATUS_CODE <= value <= MAX_STATUS_CODE or value != int(value):
        logger.debug("Rejected status code %r", value)
        raise InvalidStatusCode(value)

    return int(value)


def is_server_error(status_code: int) -> bool:
    return status_code >= SERVER_ERROR_THRESHOLD
