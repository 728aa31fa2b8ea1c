"""
Tests for the results envelope produced by the parameter store activity.
"""

from decimal import Decimal

import pytest

from shared.errors import ShapingError
from shared.services.results import dumps_envelope, shape_results


def test_empty_map():
    assert shape_results({}) == {"results": {}}


def test_string_value():
    assert shape_results({"p": "hello"}) == {"results": {"p": "hello"}}


def test_large_integer_keeps_exact_digits():
    shaped = shape_results({"v": 9007199254740993})

    value = shaped["results"]["v"]
    assert isinstance(value, Decimal)
    assert str(value) == "9007199254740993"
    assert int(value) == 9007199254740993


def test_mixed_values():
    shaped = shape_results({"/app/name": "svc", "/app/version": 42})

    assert shaped["results"]["/app/name"] == "svc"
    assert shaped["results"]["/app/version"] == Decimal("42")
    assert not isinstance(shaped["results"]["/app/version"], float)


def test_unserializable_value_raises():
    with pytest.raises(ShapingError):
        shape_results({"bad": object()})


def test_dumps_envelope_writes_bare_numbers():
    shaped = shape_results({"v": 9007199254740993, "s": "x"})

    assert dumps_envelope(shaped) == '{"results": {"v": 9007199254740993, "s": "x"}}'
