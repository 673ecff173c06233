"""FastAPI exception handlers that answer with the public Blip error shape."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any
import logging

from fastapi import FastAPI
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from blip.core.config import BlipSettings
from blip.core.config import get_blip_settings
from blip.core.errors import BlipError

logger = logging.getLogger(__name__)


def _settings(request: Request) -> BlipSettings:
    settings = getattr(request.app.state, "blip_settings", None)
    return settings if settings is not None else get_blip_settings()


def _log_error(err: BlipError, settings: BlipSettings, exc_info: BaseException | None = None) -> None:
    if err.server:
        logger.error("Request failed with %s: %s", err, err.inspection.to_dict(), exc_info=exc_info)
    elif settings.log_client_errors:
        logger.info("Request failed with %s: %s", err, err.inspection.to_dict())


def build_error_response(err: BlipError, headers: dict[str, str] | None = None) -> JSONResponse:
    """Write only the public projection of ``err`` into the response body."""
    return JSONResponse(status_code=err.status_code, content=err.to_dict(), headers=headers)


def _http_message(exc: StarletteHTTPException) -> str:
    if isinstance(exc.detail, str) and exc.detail:
        return exc.detail
    try:
        return HTTPStatus(exc.status_code).phrase
    except ValueError:
        return "Request failed"


async def blip_error_handler(request: Request, exc: BlipError) -> JSONResponse:
    """Return a raised BlipError as-is, logging its inspection view."""
    _log_error(exc, _settings(request))
    return build_error_response(exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Normalize framework HTTP exceptions to the Blip public shape."""
    data: Any = exc.detail if not isinstance(exc.detail, str) else None
    err = BlipError(_http_message(exc), status_code=exc.status_code, data=data)
    _log_error(err, _settings(request))
    return build_error_response(err, headers=getattr(exc, "headers", None))


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation failures without echoing the offending input."""
    settings = _settings(request)
    err = BlipError(
        "Request validation failed",
        status_code=settings.validation_status_code,
        root_cause=exc,
        data={"errors": jsonable_encoder(exc.errors())},
    )
    _log_error(err, settings)
    return build_error_response(err)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Hide unexpected exceptions behind a generic 500 while logging the cause."""
    settings = _settings(request)
    err = BlipError(settings.unhandled_message, status_code=500, root_cause=exc)
    _log_error(err, settings, exc_info=exc)
    return build_error_response(err)


def register_error_handlers(app: FastAPI, settings: BlipSettings | None = None) -> None:
    """Attach all Blip error handlers to a FastAPI app instance."""
    app.state.blip_settings = settings if settings is not None else get_blip_settings()
    logger.debug("Registering Blip error handlers with settings=%s", app.state.blip_settings.safe_for_logging())

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(BlipError, blip_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
