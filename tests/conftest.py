"""Shared pytest fixtures for blip test suites."""

from collections.abc import Generator
from pathlib import Path
import sys

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.exceptions import HTTPException as StarletteHTTPException

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from blip import BlipError  # noqa: E402
from blip.api.handlers import register_error_handlers  # noqa: E402
from blip.core.config import BlipSettings  # noqa: E402
from blip.core.config import get_blip_settings  # noqa: E402


class StackedError(Exception):
    """Exception carrying an explicit ``stack`` string, like an error from another runtime."""

    def __init__(self, message: str, stack: str) -> None:
        super().__init__(message)
        self.stack = stack


@pytest.fixture
def stacked_root_cause() -> StackedError:
    return StackedError("root error", stack="root error stack")


@pytest.fixture
def raised_root_cause() -> ValueError:
    try:
        raise ValueError("boom")
    except ValueError as exc:
        return exc


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Generator[None, None, None]:
    get_blip_settings.cache_clear()
    yield
    get_blip_settings.cache_clear()


def build_app(settings: BlipSettings | None = None) -> FastAPI:
    app = FastAPI()
    register_error_handlers(app, settings=settings or BlipSettings())

    @app.get("/query")
    def query(limit: int) -> dict[str, int]:
        return {"limit": limit}

    @app.get("/not-found")
    def not_found() -> None:
        raise BlipError("Pipeline not found", status_code=404, data={"pipeline_id": "secret-id"})

    @app.get("/server")
    def server_error() -> None:
        raise BlipError(
            "blip!",
            status_code=501,
            data={"a": "b"},
            root_cause=RuntimeError("root error"),
        )

    @app.get("/http")
    def http_error() -> None:
        raise StarletteHTTPException(status_code=404, detail="Client not found")

    @app.get("/http-default")
    def http_default() -> None:
        raise StarletteHTTPException(status_code=403)

    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("password=hunter2")

    return app


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Provide a test client whose app uses the Blip error handlers."""
    with TestClient(build_app(), raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def app_factory():
    """Build a fresh app with the given handler settings."""
    return build_app
