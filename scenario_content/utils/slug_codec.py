from __future__ import annotations

import re
from typing import Optional, Union

from pydantic import ValidationError

from scenario_content.core.schemas import CalculatorInputs, GoalTag, ScenarioParams
from scenario_content.utils.goal_classifier import classify_goal
from scenario_content.utils.logging import get_logger
from scenario_content.utils.rounding import format_number, round_half_up, round_int

logger = get_logger("slug_codec")

# ASCII only, matched against the whole segment
_INT_RE = re.compile(r"[0-9]+")
_RATE_RE = re.compile(r"[0-9]+(\.[0-9]+)?")
_GOAL_SEGMENT_RE = re.compile(r"[A-Za-z0-9_]+")

MIN_SEGMENTS = 7


def encode_slug(inputs: CalculatorInputs, goal: Optional[Union[GoalTag, str]] = None) -> str:
    """
    invest-{initial}-monthly-{monthly}-{rate}percent-{years}years-{goal}

    Amounts and years are rounded to whole numbers, the rate to one decimal
    (a trailing ".0" is dropped). The goal is classified when not given.
    """
    if goal is None:
        goal = classify_goal(inputs)
    tag = goal.value if isinstance(goal, GoalTag) else str(goal)

    initial = round_int(inputs.initial_amount)
    monthly = round_int(inputs.monthly_contribution)
    rate = format_number(round_half_up(inputs.annual_return, 1))
    years = round_int(inputs.time_horizon)

    return f"invest-{initial}-monthly-{monthly}-{rate}percent-{years}years-{tag}"


def _parse_int(segment: str, suffix: str = "") -> Optional[int]:
    if suffix:
        if not segment.endswith(suffix):
            return None
        segment = segment[: -len(suffix)]
    if not _INT_RE.fullmatch(segment):
        return None
    return int(segment)


def _parse_rate(segment: str) -> Optional[float]:
    if not segment.endswith("percent"):
        return None
    raw = segment[: -len("percent")].replace("point", ".")
    if not _RATE_RE.fullmatch(raw):
        return None
    return float(raw)


def decode_slug(slug: str) -> Optional[ScenarioParams]:
    """
    Inverse of ``encode_slug``. Returns None for anything that is not a valid
    scenario identifier. The embedded goal is returned as-is, never re-derived.
    """
    if not isinstance(slug, str):
        return None

    parts = slug.split("-")
    if len(parts) < MIN_SEGMENTS or parts[0] != "invest" or parts[2] != "monthly":
        return None

    # A minus sign shows up as an empty segment, which fails the digit checks.
    initial = _parse_int(parts[1])
    monthly = _parse_int(parts[3])
    rate = _parse_rate(parts[4])
    years = _parse_int(parts[5], "years")
    goal_parts = parts[6:]
    goal = "-".join(goal_parts)

    if initial is None or monthly is None or rate is None or years is None:
        logger.debug("Rejected slug with unparseable numbers: %s", slug)
        return None
    if not all(_GOAL_SEGMENT_RE.fullmatch(p) for p in goal_parts):
        logger.debug("Rejected slug with invalid goal: %s", slug)
        return None

    try:
        return ScenarioParams(
            initial_amount=initial,
            monthly_contribution=monthly,
            annual_return=rate,
            time_horizon=years,
            goal=goal,
            slug=slug,
        )
    except ValidationError:
        logger.debug("Rejected slug with out-of-range numbers: %s", slug)
        return None


def is_consistent(params: ScenarioParams) -> bool:
    """True when the embedded goal matches what the classifier would pick."""
    return classify_goal(params.inputs()).value == params.goal
