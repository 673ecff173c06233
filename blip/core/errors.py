"""The Blip error: safe for public API responses, detailed for server logs."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any
from typing import ClassVar
from typing import TextIO

from blip.core.record import ERROR_KIND
from blip.core.record import ErrorRecord
from blip.core.record import build_record
from blip.core.record import format_header
from blip.schemas.error import InspectionError
from blip.schemas.error import PublicError


class BlipError(Exception):
    """Error constructed with special considerations for HTTP clients.

    A ``BlipError`` is safe for public APIs by default: ``dict(err)``,
    ``err.to_dict()`` and ``err.to_json()`` only ever expose ``message`` and
    ``statusCode``. Use ``err.inspection`` (or ``err.log``) for server-side
    logging; it adds ``server``, ``data``, the stack and a root cause summary.

    Instances are immutable once constructed.
    """

    name: ClassVar[str] = ERROR_KIND

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        root_cause: object | None = None,
        data: Any = None,
    ) -> None:
        record = build_record(message, status_code=status_code, root_cause=root_cause, data=data)
        super().__init__(record.message)

        object.__setattr__(self, "_record", record)
        object.__setattr__(self, "_public", PublicError.from_record(record))
        object.__setattr__(self, "_inspection", InspectionError.from_record(record))
        if isinstance(root_cause, BaseException):
            self.__cause__ = root_cause
        object.__setattr__(self, "_frozen", True)

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False) and not _is_dunder(name):
            raise AttributeError(f"{type(self).__name__} is immutable; cannot set {name!r}")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if getattr(self, "_frozen", False) and not _is_dunder(name):
            raise AttributeError(f"{type(self).__name__} is immutable; cannot delete {name!r}")
        super().__delattr__(name)

    def __reduce__(self) -> tuple[Any, ...]:
        # Rebuilt from the constructor inputs; the stack is captured anew on load.
        record = self._record
        return (_rebuild, (type(self), record.message, record.status_code, record.data, record.root_cause))

    @property
    def message(self) -> str:
        return self._record.message

    @property
    def status_code(self) -> int:
        return self._record.status_code

    @property
    def code(self) -> int:
        """Alias for ``status_code``."""
        return self._record.status_code

    @property
    def status(self) -> int:
        """Alias for ``status_code``."""
        return self._record.status_code

    @property
    def data(self) -> Any:
        return self._record.data

    @property
    def server(self) -> bool:
        """True for server errors (status code >= 500)."""
        return self._record.server

    @property
    def stack(self) -> str:
        """The root cause's stack when one was provided, otherwise the stack of this error."""
        return self._record.stack

    @property
    def original_stack(self) -> str:
        """The stack captured when this error was constructed, even if ``stack`` was overridden."""
        return self._record.original_stack

    @property
    def root_cause(self) -> object | None:
        """The error passed as ``root_cause``, if any."""
        return self._record.root_cause

    @property
    def public(self) -> PublicError:
        return self._public

    @property
    def inspection(self) -> InspectionError:
        """Verbose representation for consoles and custom logging setups."""
        return self._inspection

    @property
    def log(self) -> InspectionError:
        """Alias for ``inspection``."""
        return self._inspection

    @property
    def inspect(self) -> InspectionError:
        """Alias for ``inspection``."""
        return self._inspection

    def to_dict(self) -> dict[str, Any]:
        return self._public.to_dict()

    def to_json(self) -> str:
        return self._public.model_dump_json(by_alias=True)

    def render(self, stream: TextIO | None = None) -> InspectionError:
        """Render for display exactly as ``err.inspection.render()`` would.

        Writes a ``BlipError: <message>:`` header line to ``stream`` as a side
        effect and returns the inspection projection.
        """
        return self._inspection.render(stream)

    def keys(self) -> list[str]:
        return list(self._public.to_dict())

    def __getitem__(self, key: str) -> Any:
        return self._public.to_dict()[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.keys())

    def __str__(self) -> str:
        return format_header(self._record.message)

    def __repr__(self) -> str:
        return repr(self._inspection)


def _rebuild(
    cls: type[BlipError],
    message: str,
    status_code: int,
    data: Any,
    root_cause: object | None,
) -> BlipError:
    return cls(message, status_code=status_code, data=data, root_cause=root_cause)


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")
