from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, getcontext
from typing import Union

getcontext().prec = 28

Number = Union[int, float, Decimal]


def _d(x) -> Decimal:
    if isinstance(x, Decimal):
        return x
    return Decimal(str(x))


def round_half_up(value: Number, places: int = 0) -> Decimal:
    """Round half away from zero for positives (7.25 -> 7.3, 19.5 -> 20)."""
    dec = _d(value)
    if not dec.is_finite():
        raise ValueError(f"cannot round non-finite value: {value}")
    exp = Decimal(1).scaleb(-places) if places > 0 else Decimal(1)
    # quantize needs room for every integer digit plus the kept decimals
    ctx = getcontext().copy()
    ctx.prec = max(ctx.prec, dec.adjusted() + places + 2)
    return dec.quantize(exp, rounding=ROUND_HALF_UP, context=ctx)


def round_int(value: Number) -> int:
    return int(round_half_up(value, 0))


def round_one(value: Number) -> float:
    return float(round_half_up(value, 1))


def format_number(value: Number) -> str:
    """Render a number the short way: 7.0 -> '7', 7.50 -> '7.5'."""
    dec = _d(value)
    if dec == dec.to_integral_value():
        return str(int(dec))
    return format(dec.normalize(), "f")
