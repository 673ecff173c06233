"""Settings for the HTTP error handlers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

from blip.core.status import InvalidStatusCode
from blip.core.status import resolve_status_code

DEFAULT_UNHANDLED_MESSAGE = "Internal server error"
DEFAULT_VALIDATION_STATUS_CODE = 400

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw)


@dataclass(frozen=True)
class BlipSettings:
    """Runtime settings for turning exceptions into Blip responses."""

    log_client_errors: bool = False
    unhandled_message: str = DEFAULT_UNHANDLED_MESSAGE
    validation_status_code: int = DEFAULT_VALIDATION_STATUS_CODE

    def __post_init__(self) -> None:
        # NaN would otherwise resolve to the 500 default.
        if self.validation_status_code != self.validation_status_code:
            raise InvalidStatusCode(self.validation_status_code)
        object.__setattr__(self, "validation_status_code", resolve_status_code(self.validation_status_code))

    def safe_for_logging(self) -> dict[str, str | int | bool]:
        """Return settings in a form suitable for log lines."""
        return {
            "log_client_errors": self.log_client_errors,
            "unhandled_message": self.unhandled_message,
            "validation_status_code": self.validation_status_code,
        }


@lru_cache(maxsize=1)
def get_blip_settings() -> BlipSettings:
    """Load handler settings from the environment."""
    return BlipSettings(
        log_client_errors=_get_bool_env("BLIP_LOG_CLIENT_ERRORS", False),
        unhandled_message=os.getenv("BLIP_UNHANDLED_MESSAGE", DEFAULT_UNHANDLED_MESSAGE),
        validation_status_code=_get_int_env("BLIP_VALIDATION_STATUS_CODE", DEFAULT_VALIDATION_STATUS_CODE),
    )
