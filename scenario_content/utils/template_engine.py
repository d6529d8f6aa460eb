"""
Placeholder substitution for narrative templates.

Placeholders are ``{key}`` or ``{{ key }}`` (whitespace tolerated). How a value
is rendered depends only on the key name, via ``FORMAT_RULES``: the first row
whose exact names or substrings match decides. Unknown placeholders and stray
braces are left untouched.
"""
from __future__ import annotations

import re
from enum import Enum
from numbers import Number
from typing import Any, FrozenSet, List, Mapping, Tuple

from scenario_content.utils.rounding import format_number, round_half_up, round_int


class FormatKind(str, Enum):
    CURRENCY = "currency"
    PERCENT = "percent"
    YEARS = "years"
    PLAIN = "plain"


FormatRule = Tuple[FormatKind, FrozenSet[str], Tuple[str, ...]]

FORMAT_RULES: Tuple[FormatRule, ...] = (
    (
        FormatKind.CURRENCY,
        frozenset({
            "futureValue", "fiveYearValue", "tenYearValue", "monthlyTotal",
            "windfallAmount", "windfallValue", "lumpSumValue", "delayedStartLoss",
            "firstMilestone", "timingBenefit", "higherContribution", "lowerContribution",
        }),
        ("Amount", "Value", "Contribution", "Gain", "Loss", "Total", "Benefit", "Savings"),
    ),
    (
        FormatKind.PERCENT,
        frozenset({
            "escalationPercent", "taxSavings", "feeReduction", "rebalancingBonus",
            "realReturn", "contributionPercentage", "successRate", "positiveYears",
            "averageIncrease", "marketDownturnPercent", "timingPercent",
            "adaptationPercent", "increasePercent", "satisfactionRate",
        }),
        ("Return", "Percent", "Rate", "Allocation", "Inflation", "Interest"),
    ),
    (
        FormatKind.YEARS,
        frozenset({"extendedTimeline", "shorterTimeline", "historicalPeriod", "milestoneTimeframe"}),
        ("Timeline",),
    ),
)


def classify_key(key: str) -> FormatKind:
    # Exact names beat substrings: "taxSavings" is a percent, not an amount.
    for kind, names, _ in FORMAT_RULES:
        if key in names:
            return kind
    for kind, _, fragments in FORMAT_RULES:
        if any(f in key for f in fragments):
            return kind
    return FormatKind.PLAIN


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def format_currency(amount: Any) -> str:
    """$1.2M / $15K / $999 (whole units, half-up)."""
    rounded = round_int(amount)
    if rounded >= 1_000_000:
        return f"${round_half_up(rounded / 1_000_000, 1):.1f}M"
    if rounded >= 1_000:
        return f"${round_int(rounded / 1_000)}K"
    return f"${rounded:,}"


def format_percent(value: Any) -> str:
    return f"{format_number(round_half_up(value, 1))}%"


def format_years(value: Any, unit: str = "years") -> str:
    shown = format_number(value) if _is_number(value) else str(value)
    return f"{shown} {unit}"


def format_plain(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def format_value(key: str, value: Any, *, years_unit: str = "years") -> str:
    kind = classify_key(key)
    if kind is FormatKind.CURRENCY and _is_number(value):
        return format_currency(value)
    if kind is FormatKind.PERCENT and _is_number(value):
        return format_percent(value)
    if kind is FormatKind.YEARS:
        return format_years(value, years_unit)
    return format_plain(value)


_PLACEHOLDER_RE = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}|\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}")


def find_placeholders(template: str) -> List[str]:
    """Placeholder names in first-seen order, without duplicates."""
    seen: List[str] = []
    for m in _PLACEHOLDER_RE.finditer(template or ""):
        name = m.group(1) or m.group(2)
        if name not in seen:
            seen.append(name)
    return seen


def populate(template: str, params: Mapping[str, Any], *, years_unit: str = "years") -> str:
    """Replace every known placeholder in one pass; leave everything else alone."""
    if not template:
        return template

    rendered = {}

    def _sub(m: re.Match) -> str:
        name = m.group(1) or m.group(2)
        if name not in params:
            return m.group(0)
        if name not in rendered:
            rendered[name] = format_value(name, params[name], years_unit=years_unit)
        return rendered[name]

    return _PLACEHOLDER_RE.sub(_sub, template)
