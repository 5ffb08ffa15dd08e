"""Utility constants and helpers for numrange.

Bound sentinels and the defaults used throughout the API.
"""

import math

# Sentinels for the unbounded ends of the extended real line
NEGATIVE_INFINITY = -math.inf
POSITIVE_INFINITY = math.inf

# Delimiter used by the text grammar when the caller supplies none
DEFAULT_DELIMITER = ":"


def format_bound(value: float) -> str:
    """Render a finite bound, dropping the ``.0`` of integral floats."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
