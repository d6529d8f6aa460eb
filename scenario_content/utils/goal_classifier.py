from __future__ import annotations

from typing import Callable, List, Tuple

from scenario_content.core.schemas import CalculatorInputs, GoalTag

Rule = Callable[[float, float, int], bool]

# Ordered: the first matching rule wins.
_RULES: List[Tuple[GoalTag, Rule]] = [
    (GoalTag.RETIREMENT, lambda init, mon, yrs: yrs >= 20 and mon >= 1000),
    (GoalTag.WEALTH, lambda init, mon, yrs: yrs >= 15 and (init >= 50000 or mon >= 2000)),
    (GoalTag.EMERGENCY, lambda init, mon, yrs: yrs <= 5 and init <= 20000 and mon <= 1000),
    (GoalTag.HOUSE, lambda init, mon, yrs: 5 <= yrs <= 15 and (init >= 10000 or mon >= 1500)),
    (GoalTag.EDUCATION, lambda init, mon, yrs: 10 <= yrs <= 18 and mon >= 500),
    (GoalTag.VACATION, lambda init, mon, yrs: yrs <= 10 and init <= 50000 and mon <= 1000),
    (GoalTag.STARTER, lambda init, mon, yrs: init <= 10000 and mon <= 500),
]


def classify_goal(inputs: CalculatorInputs) -> GoalTag:
    init = inputs.initial_amount
    mon = inputs.monthly_contribution
    yrs = inputs.time_horizon
    for tag, rule in _RULES:
        if rule(init, mon, yrs):
            return tag
    return GoalTag.INVESTMENT
