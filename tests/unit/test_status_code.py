"""Unit tests for status code validation and the derived server flag."""

from __future__ import annotations

from http import HTTPStatus
from numbers import Real
import math

import pytest

from blip import BlipError
from blip import InvalidStatusCode
from blip.core.status import resolve_status_code


@pytest.mark.parametrize("status_code", [500, 599])
def test_server_is_true_from_500(status_code: int) -> None:
    assert BlipError("", status_code=status_code).server is True


@pytest.mark.parametrize("status_code", [100, 404, 499])
def test_server_is_false_below_500(status_code: int) -> None:
    assert BlipError("", status_code=status_code).server is False


@pytest.mark.parametrize("status_code", [99, 600, 0, -1, math.inf, -math.inf])
def test_out_of_range_status_codes_raise(status_code: float) -> None:
    with pytest.raises(InvalidStatusCode):
        BlipError("", status_code=status_code)


@pytest.mark.parametrize("status_code", [100, 599])
def test_inclusive_boundaries_are_accepted(status_code: int) -> None:
    assert BlipError("", status_code=status_code).status_code == status_code


@pytest.mark.parametrize("status_code", [None, math.nan])
def test_missing_or_nan_status_code_defaults_to_500(status_code: float | None) -> None:
    assert BlipError("", status_code=status_code).status_code == 500


def test_invalid_status_code_is_a_value_error_with_the_rejected_value() -> None:
    with pytest.raises(ValueError) as excinfo:
        resolve_status_code(600)

    assert isinstance(excinfo.value, InvalidStatusCode)
    assert excinfo.value.status_code == 600
    assert str(excinfo.value) == "Invalid status code: 600"


def test_http_status_members_and_integral_floats_are_normalized_to_int() -> None:
    assert resolve_status_code(HTTPStatus.NOT_FOUND) == 404
    assert type(resolve_status_code(HTTPStatus.NOT_FOUND)) is int
    assert resolve_status_code(404.0) == 404
    assert type(resolve_status_code(404.0)) is int


def test_non_integral_status_codes_raise() -> None:
    with pytest.raises(InvalidStatusCode):
        resolve_status_code(404.5)


@pytest.mark.parametrize("status_code", [True, "404", [404]])
def test_non_numeric_status_codes_raise_type_error(status_code: object) -> None:
    with pytest.raises(TypeError):
        resolve_status_code(status_code)  # type: ignore[arg-type]


@pytest.mark.parametrize("status_code", [None, 100, 404, 599])
def test_code_and_status_alias_status_code(status_code: int | None) -> None:
    err = BlipError("", status_code=status_code)

    assert err.code == err.status_code
    assert err.status == err.status_code


class _RealNaN:
    """Real number type outside the float hierarchy that holds NaN."""

    def __float__(self) -> float:
        return math.nan


Real.register(_RealNaN)


def test_nan_from_any_real_type_defaults_to_500() -> None:
    assert resolve_status_code(_RealNaN()) == 500  # type: ignore[arg-type]
