from __future__ import annotations

from typing import Dict, List

from scenario_content.core.schemas import CalculatorInputs, GoalTag, ScenarioMetadata
from scenario_content.utils.goal_classifier import classify_goal
from scenario_content.utils.rounding import format_number

GOAL_NAMES: Dict[GoalTag, str] = {
    GoalTag.RETIREMENT: "Retirement Planning",
    GoalTag.EMERGENCY: "Emergency Fund",
    GoalTag.HOUSE: "House Down Payment",
    GoalTag.EDUCATION: "Education Fund",
    GoalTag.WEALTH: "Wealth Building",
    GoalTag.VACATION: "Vacation Fund",
    GoalTag.STARTER: "Starter Investment",
    GoalTag.INVESTMENT: "Investment Plan",
}

# Upper bounds for scenarios worth publishing
MAX_INITIAL_AMOUNT = 10_000_000
MAX_MONTHLY_CONTRIBUTION = 100_000
MAX_ANNUAL_RETURN = 50
MAX_TIME_HORIZON = 100


def _grouped(amount: float) -> str:
    if float(amount).is_integer():
        return f"{int(amount):,}"
    return f"{amount:,}"


def validate_scenario_params(inputs: CalculatorInputs) -> bool:
    return (
        inputs.initial_amount <= MAX_INITIAL_AMOUNT
        and inputs.monthly_contribution <= MAX_MONTHLY_CONTRIBUTION
        and inputs.annual_return <= MAX_ANNUAL_RETURN
        and inputs.time_horizon <= MAX_TIME_HORIZON
    )


def scenario_name(inputs: CalculatorInputs) -> str:
    goal = classify_goal(inputs)
    return (
        f"{GOAL_NAMES[goal]}: ${_grouped(inputs.initial_amount)} "
        f"+ ${_grouped(inputs.monthly_contribution)}/month"
    )


def meta_description(inputs: CalculatorInputs) -> str:
    goal = classify_goal(inputs)
    return (
        f"Calculate investing ${_grouped(inputs.initial_amount)} initially with "
        f"${_grouped(inputs.monthly_contribution)} monthly contributions at "
        f"{format_number(inputs.annual_return)}% annual return over {inputs.time_horizon} years "
        f"for {goal.value}. See projected growth, risk analysis, and optimization tips."
    )


def seo_keywords(inputs: CalculatorInputs) -> List[str]:
    goal = classify_goal(inputs)
    return [
        f"invest {format_number(inputs.initial_amount)}",
        f"monthly {format_number(inputs.monthly_contribution)}",
        f"{format_number(inputs.annual_return)} percent return",
        f"{inputs.time_horizon} year investment",
        f"{goal.value} planning",
        "investment calculator",
        "compound interest",
        "future value",
        "retirement planning",
        "investment strategy",
    ]


def scenario_metadata(inputs: CalculatorInputs) -> ScenarioMetadata:
    return ScenarioMetadata(
        name=scenario_name(inputs),
        description=meta_description(inputs),
        keywords=seo_keywords(inputs),
    )
