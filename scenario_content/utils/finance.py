from __future__ import annotations

from decimal import Decimal
from typing import Dict, List

from scenario_content.utils.rounding import _d

_TWELVE = Decimal(12)
_HUNDRED = Decimal(100)


def _monthly_rate(annual_return_pct: Decimal) -> Decimal:
    if annual_return_pct < 0:
        raise ValueError("annual_return cannot be negative")
    return annual_return_pct / _HUNDRED / _TWELVE


def _annuity(monthly: Decimal, mr: Decimal, n_months: int) -> Decimal:
    if monthly == 0 or n_months <= 0:
        return Decimal(0)
    if mr == 0:
        return monthly * n_months
    return monthly * (((Decimal(1) + mr) ** n_months - Decimal(1)) / mr)


def future_value_d(initial, monthly, annual_return_pct, years: int) -> Decimal:
    initial, monthly, rate = _d(initial), _d(monthly), _d(annual_return_pct)
    n_months = int(years) * 12
    mr = _monthly_rate(rate)
    if mr == 0:
        return initial + monthly * n_months
    return initial * ((Decimal(1) + mr) ** n_months) + _annuity(monthly, mr, n_months)


def future_value(initial, monthly, annual_return_pct, years: int) -> float:
    """Lump sum plus ordinary annuity, both compounded monthly."""
    return float(future_value_d(initial, monthly, annual_return_pct, years))


def milestone_value_d(initial, monthly, annual_return_pct, years: int) -> Decimal:
    initial, monthly, rate = _d(initial), _d(monthly), _d(annual_return_pct)
    n_months = int(years) * 12
    mr = _monthly_rate(rate)
    if mr == 0:
        return initial + monthly * n_months
    lump = initial * ((Decimal(1) + rate / _HUNDRED) ** int(years))
    return lump + _annuity(monthly, mr, n_months)


def milestone_value(initial, monthly, annual_return_pct, years: int) -> float:
    """
    Projection used for milestones and comparison scenarios:
    the lump sum compounds yearly, contributions compound monthly.
    """
    return float(milestone_value_d(initial, monthly, annual_return_pct, years))


def total_contributions(initial, monthly, years: int) -> float:
    return float(_d(initial) + _d(monthly) * int(years) * 12)


def annual_breakdown(initial, monthly, annual_return_pct, years: int) -> List[Dict[str, float]]:
    rows: List[Dict[str, float]] = []
    previous = _d(initial)
    for year in range(0, int(years) + 1):
        value = future_value_d(initial, monthly, annual_return_pct, year)
        contributed = _d(initial) + _d(monthly) * year * 12
        rows.append({
            "year": year,
            "total_value": float(value),
            "contributions": float(contributed),
            "growth": float(value - contributed),
            "yearly_growth": 0.0 if year == 0 else float(value - previous),
        })
        previous = value
    return rows


def required_monthly_contribution(target, initial, annual_return_pct, years: int) -> float:
    target, initial = _d(target), _d(initial)
    n_months = int(years) * 12
    if n_months <= 0:
        return 0.0
    mr = _monthly_rate(_d(annual_return_pct))
    if mr == 0:
        remaining = target - initial
        return 0.0 if remaining <= 0 else float(remaining / n_months)

    growth = (Decimal(1) + mr) ** n_months
    remaining = target - initial * growth
    if remaining <= 0:
        return 0.0
    return float(max(Decimal(0), remaining * mr / (growth - Decimal(1))))


def years_to_target(target, initial, monthly, annual_return_pct, *, max_years: int = 50) -> float:
    """Months are stepped one at a time; capped at ``max_years``."""
    target, initial, monthly = _d(target), _d(initial), _d(monthly)
    if target <= initial:
        return 0.0
    mr = _monthly_rate(_d(annual_return_pct))
    if mr == 0 and monthly == 0:
        return float(max_years)

    balance = initial
    for month in range(1, max_years * 12 + 1):
        balance = balance * (Decimal(1) + mr) + monthly
        if balance >= target:
            return month / 12
    return float(max_years)
