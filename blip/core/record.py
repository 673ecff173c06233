"""Immutable error record shared by the public and inspection projections."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any
import traceback

from blip.core.status import is_server_error
from blip.core.status import resolve_status_code

ERROR_KIND = "BlipError"

_PACKAGE_DIR = Path(__file__).resolve().parents[1]
_INTERNAL_DIRS = (_PACKAGE_DIR / "core", _PACKAGE_DIR / "schemas")


@dataclass(frozen=True, slots=True)
class CausalError:
    """Name, message and optional stack of the error that caused a Blip error."""

    name: str
    message: str
    stack: str | None = None


@dataclass(frozen=True, slots=True)
class ErrorRecord:
    """Single source of truth for one Blip error.

    ``stack`` is the root cause's stack when one was available, otherwise the
    stack captured at construction. ``original_stack`` is always the captured one.
    """

    message: str
    status_code: int
    data: Any
    root_cause: object | None
    causal_error: CausalError | None
    stack: str
    original_stack: str

    @property
    def server(self) -> bool:
        return is_server_error(self.status_code)


def format_header(message: str) -> str:
    """Render ``<Kind>: <message>``, or the bare kind for an empty message."""
    if not message:
        return ERROR_KIND
    return f"{ERROR_KIND}: {message}"


def _is_internal_frame(frame: traceback.FrameSummary) -> bool:
    try:
        path = Path(frame.filename).resolve()
    except (OSError, ValueError):
        return False
    return any(path.is_relative_to(directory) for directory in _INTERNAL_DIRS)


def capture_stack(message: str) -> str:
    """Capture the current call stack, trimmed of frames inside the error core."""
    frames = traceback.extract_stack()
    while frames and _is_internal_frame(frames[-1]):
        frames.pop()

    lines = [format_header(message), *traceback.format_list(frames)]
    return "\n".join(line.rstrip("\n") for line in lines)


def _stack_text(stack: object) -> str | None:
    if not stack:
        return None
    if isinstance(stack, str):
        return stack
    if isinstance(stack, (list, tuple)):
        return "\n".join(str(line).rstrip("\n") for line in stack)
    return str(stack)


def describe_cause(cause: object) -> CausalError:
    """Summarize an exception or error-like object as name, message and stack."""
    if isinstance(cause, Mapping):
        return CausalError(
            name=str(cause.get("name", "Error")),
            message=str(cause.get("message", "")),
            stack=_stack_text(cause.get("stack")),
        )

    if isinstance(cause, BaseException):
        explicit_name = vars(cause).get("name")
        name = explicit_name if isinstance(explicit_name, str) else type(cause).__name__
        message = str(cause)
        stack = _stack_text(getattr(cause, "stack", None))
        if stack is None and cause.__traceback__ is not None:
            stack = "".join(traceback.format_exception(cause)).rstrip("\n")
        return CausalError(name=name, message=message, stack=stack)

    return CausalError(
        name=str(getattr(cause, "name", type(cause).__name__)),
        message=str(getattr(cause, "message", "")),
        stack=_stack_text(getattr(cause, "stack", None)),
    )


def build_record(
    message: str | None = None,
    *,
    status_code: int | None = None,
    root_cause: object | None = None,
    data: Any = None,
) -> ErrorRecord:
    """Validate inputs and build the record, deriving ``server`` and the stacks."""
    resolved_status = resolve_status_code(status_code)
    resolved_message = str(message) if message else ""

    original_stack = capture_stack(resolved_message)
    causal_error = describe_cause(root_cause) if root_cause is not None else None
    stack = causal_error.stack if causal_error and causal_error.stack else original_stack

    return ErrorRecord(
        message=resolved_message,
        status_code=resolved_status,
        data=data,
        root_cause=root_cause,
        causal_error=causal_error,
        stack=stack,
        original_stack=original_stack,
    )
