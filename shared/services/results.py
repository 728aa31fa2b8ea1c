"""
Output shaping for the parameter store activity.

Result maps are re-encoded through JSON before they are handed back to the
engine so that every number comes back as a ``Decimal`` carrying the exact
digits it was written with. Version numbers of stored parameters can exceed
2**53 and must not pass through a float on the way out.
"""

import json
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from shared.errors import ShapingError

RESULTS_KEY = "results"


def shape_results(results: Mapping[str, Any]) -> dict[str, Any]:
    """
    Wrap a parameter result map in the output envelope.

    Args:
        results: Mapping of parameter name to value (string or version number)

    Returns:
        ``{"results": {...}}`` with every numeric leaf decoded as ``Decimal``

    Raises:
        ShapingError: If the map cannot be serialized or decoded
    """
    try:
        encoded = json.dumps(dict(results), allow_nan=False)
        decoded = json.loads(encoded, parse_int=Decimal, parse_float=Decimal)
    except (TypeError, ValueError) as e:
        raise ShapingError(f"Failed to shape parameter results: {e}") from e

    return {RESULTS_KEY: decoded}


def dumps_envelope(value: Any) -> str:
    """Render a shaped envelope as JSON, writing ``Decimal`` leaves as bare numbers."""
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Mapping):
        items = (
            f"{json.dumps(str(k))}: {dumps_envelope(v)}" for k, v in value.items()
        )
        return "{" + ", ".join(items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(dumps_envelope(v) for v in value) + "]"
    return json.dumps(value)


def decimals_to_numbers(value: Any) -> Any:
    """Replace ``Decimal`` leaves with ``int`` (integral) or ``float`` for JSON encoding."""
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, Mapping):
        return {k: decimals_to_numbers(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [decimals_to_numbers(v) for v in value]
    return value


def numbers_to_decimals(value: Any) -> Any:
    """Turn decoded JSON numbers back into ``Decimal`` leaves."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, Mapping):
        return {k: numbers_to_decimals(v) for k, v in value.items()}
    if isinstance(value, list):
        return [numbers_to_decimals(v) for v in value]
    return value
