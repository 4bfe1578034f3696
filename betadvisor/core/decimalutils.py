from __future__ import annotations

from decimal import Decimal, InvalidOperation, getcontext, ROUND_HALF_UP
from typing import Optional, Union

# Configure global context for odds arithmetic.
getcontext().prec = 28
getcontext().rounding = ROUND_HALF_UP

NumberLike = Union[str, float, int, Decimal]


def D(value: NumberLike) -> Decimal:
    """Safe Decimal constructor using string conversion to avoid float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def q_odds(value: NumberLike) -> Decimal:
    return D(value).quantize(Decimal("0.001"))


def parse_odds(value: object) -> Optional[Decimal]:
    """Parse odds transmitted as text; None for anything that is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = D(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not parsed.is_finite():
        return None
    return parsed
