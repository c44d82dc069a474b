"""ORM-level guards used from ``@validates`` hooks.

Services reject bad input with user-facing messages first; these only stop a
buggy write path from storing a non-positive amount or an out-of-range
ranking.
"""

from decimal import Decimal, InvalidOperation

MAX_RANKING = 5


def _as_decimal(key: str, value) -> Decimal:
    try:
        return value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"{key} must be numeric, got {value!r}")


def positive(key: str, value):
    """Accept None or a number strictly greater than zero."""
    if value is not None and _as_decimal(key, value) <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return value


def rating_score(key: str, value):
    """Accept None or a ranking in [0, MAX_RANKING]."""
    if value is not None and not 0 <= _as_decimal(key, value) <= MAX_RANKING:
        raise ValueError(f"{key} must be between 0 and {MAX_RANKING}, got {value}")
    return value
