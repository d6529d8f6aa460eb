from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, Union

from scenario_content.core.config import SETTINGS
from scenario_content.core.schemas import CalculatorInputs
from scenario_content.utils.finance import future_value, milestone_value, total_contributions
from scenario_content.utils.rounding import round_int, round_one

MetricValue = Union[int, float, str]
DerivedMetrics = Dict[str, MetricValue]

# Comparison knobs
CONTRIBUTION_INCREASE_PERCENT = 50
CONTRIBUTION_DECREASE_PERCENT = 25
CONTRIBUTION_FLOOR = 1001
TIMELINE_SHIFT_YEARS = 5
MIN_SHORTER_TIMELINE = 5
RETURN_SHIFT_PCT = 2
MIN_CONSERVATIVE_RETURN = 2
DELAYED_START_COST = 0.08
ESCALATION_PERCENT = 3
ESCALATION_MULTIPLIER = 1.2

# Historical / community figures quoted in the narrative
COMMUNITY_FIGURES: Dict[str, MetricValue] = {
    "averageDownturn": "15-20%",
    "averageBullReturn": "18-25%",
    "averageIncrease": 15,
    "marketDownturnPercent": 42,
    "timingPercent": 68,
    "adaptationPercent": 35,
    "increasePercent": 72,
    "satisfactionRate": 94,
}

# Optimization tips
TIMING_BENEFIT_SHARE = 0.005
TAX_SAVINGS_PCT = 25
FEE_REDUCTION_PCT = 0.5
REBALANCING_BONUS_PCT = 0.8
WINDFALL_AMOUNT = 2000

MARKET_CYCLE_YEARS = 7
DOMESTIC_SHARE = 0.6


@dataclass(frozen=True)
class MarketAssumptions:
    current_inflation: float = 3.2
    current_interest_rates: float = 5.25
    market_volatility: str = "moderate"

    @classmethod
    def from_settings(cls) -> "MarketAssumptions":
        return cls(
            current_inflation=SETTINGS.current_inflation,
            current_interest_rates=SETTINGS.current_interest_rates,
            market_volatility=SETTINGS.market_volatility,
        )


def risk_category(annual_return: float) -> str:
    if annual_return >= 10:
        return "aggressive"
    if annual_return <= 5:
        return "conservative"
    return "moderate"


def risk_level(annual_return: float) -> str:
    if annual_return >= 12:
        return "very_high"
    if annual_return >= 8:
        return "high"
    if annual_return <= 2:
        return "very_low"
    if annual_return <= 4:
        return "low"
    return "moderate"


def volatility_band(annual_return: float) -> Tuple[float, float]:
    return max(2.0, annual_return - 3), annual_return + 5


def success_rate(annual_return: float) -> float:
    return min(95.0, max(60.0, 85 - (annual_return - 6) * 2))


def asset_allocation(time_horizon: int) -> Tuple[int, int, int]:
    """(stock, bond, alternative) percentages summing to exactly 100."""
    stock = min(100 - round_int(time_horizon), 90)
    bond = min(round_int(time_horizon), 40)
    alternative = max(100 - stock - bond, 0)

    residual = 100 - (stock + bond + alternative)
    if residual:
        largest = max(stock, bond, alternative)
        if largest == stock:
            stock += residual
        elif largest == bond:
            bond += residual
        else:
            alternative += residual
    return stock, bond, alternative


def _pct_label(value: float) -> str:
    return f"{round_one(value):g}%"


def compute_derived_metrics(
    inputs: CalculatorInputs,
    *,
    current_future_value: Optional[float] = None,
    market: Optional[MarketAssumptions] = None,
    label: Optional[Callable[[str, str], Optional[str]]] = None,
) -> DerivedMetrics:
    """
    Everything the narrative quotes beyond the four raw inputs.

    ``current_future_value`` is the baseline every comparison is measured
    against; when omitted it is computed with ``future_value``. ``label``
    maps (group, key) to a localized label for the risk tiers.
    """
    market = market or MarketAssumptions.from_settings()

    initial = inputs.initial_amount
    monthly = inputs.monthly_contribution
    rate = inputs.annual_return
    years = inputs.time_horizon

    def project(m: float = monthly, r: float = rate, t: int = years, i: float = initial) -> float:
        return milestone_value(i, m, r, t)

    baseline = current_future_value if current_future_value else future_value(initial, monthly, rate, years)
    contributed = total_contributions(initial, monthly, years)
    monthly_total = monthly * years * 12

    out: DerivedMetrics = {}

    # Risk
    category = risk_category(rate)
    level = risk_level(rate)
    low, high = volatility_band(rate)
    out["riskCategory"] = (label and label("risk_categories", category)) or category
    out["riskLevel"] = (label and label("risk_levels", level)) or level
    out["volatilityRange"] = f"{_pct_label(low)}-{_pct_label(high)}"

    # Milestones
    out["fiveYearValue"] = round_int(project(t=5))
    out["tenYearValue"] = round_int(project(t=10))
    out["monthlyTotal"] = round_int(monthly_total)

    # Contribution scenarios
    higher = max(monthly * (1 + CONTRIBUTION_INCREASE_PERCENT / 100), CONTRIBUTION_FLOOR)
    higher_value = project(m=higher)
    lower = max(monthly * (1 - CONTRIBUTION_DECREASE_PERCENT / 100), CONTRIBUTION_FLOOR)
    lower_value = project(m=lower)
    out.update({
        "higherContribution": round_int(higher),
        "higherContributionValue": round_int(higher_value),
        "higherContributionGain": round_int(higher_value - baseline),
        "lowerContribution": round_int(lower),
        "lowerContributionValue": round_int(lower_value),
        "lowerContributionLoss": round_int(baseline - lower_value),
        "contributionIncreasePercent": CONTRIBUTION_INCREASE_PERCENT,
        "contributionDecreasePercent": CONTRIBUTION_DECREASE_PERCENT,
    })

    # Timeline scenarios
    extended = years + TIMELINE_SHIFT_YEARS
    shorter = max(years - TIMELINE_SHIFT_YEARS, MIN_SHORTER_TIMELINE)
    extended_value = project(t=extended)
    shorter_value = project(t=shorter)
    out.update({
        "extendedTimeline": extended,
        "extendedValue": round_int(extended_value),
        "extendedGain": round_int(extended_value - baseline),
        "shorterTimeline": shorter,
        "shorterValue": round_int(shorter_value),
        "shorterLoss": round_int(baseline - shorter_value),
    })

    # Return scenarios
    conservative = max(MIN_CONSERVATIVE_RETURN, rate - RETURN_SHIFT_PCT)
    aggressive = rate + RETURN_SHIFT_PCT
    conservative_value = project(r=conservative)
    aggressive_value = project(r=aggressive)
    out.update({
        "conservativeReturn": conservative,
        "aggressiveReturn": aggressive,
        "conservativeValue": round_int(conservative_value),
        "aggressiveValue": round_int(aggressive_value),
        "conservativeLoss": round_int(baseline - conservative_value),
        "aggressiveGain": round_int(aggressive_value - baseline),
    })

    # Lump sum today
    lump_sum = contributed * (1 + rate / 100) ** years
    out.update({
        "totalContributions": round_int(contributed),
        "lumpSumValue": round_int(lump_sum),
        "lumpSumGain": round_int(lump_sum - baseline),
        "delayedStartLoss": round_int(baseline * DELAYED_START_COST),
    })

    # Success and escalation
    escalated = round_int(baseline * ESCALATION_MULTIPLIER)
    out.update({
        "successRate": success_rate(rate),
        "escalationPercent": ESCALATION_PERCENT,
        "escalatedValue": escalated,
        "escalationBenefit": escalated - round_int(baseline),
        "positiveYears": min(70 + rate * 2, 85),
    })

    # Community
    out.update(COMMUNITY_FIGURES)
    out["firstMilestone"] = round_int(initial * 2 + 10000)
    out["milestoneTimeframe"] = max(3, round_int(years / 3))

    # Optimization
    out.update({
        "timingBenefit": round_int(project(i=0) * TIMING_BENEFIT_SHARE),
        "taxSavings": TAX_SAVINGS_PCT,
        "feeReduction": FEE_REDUCTION_PCT,
        "feeSavings": round_int(project() - project(r=max(0.0, rate - FEE_REDUCTION_PCT))),
        "rebalancingBonus": REBALANCING_BONUS_PCT,
        "windfallAmount": WINDFALL_AMOUNT,
        "windfallValue": round_int(project() + project(i=0, m=WINDFALL_AMOUNT / 12)),
    })

    # Allocation
    stock, bond, alternative = asset_allocation(years)
    out.update({
        "stockAllocation": stock,
        "bondAllocation": bond,
        "alternativeAllocation": alternative,
        "domesticAllocation": round_int(stock * DOMESTIC_SHARE),
        "internationalAllocation": round_int(stock * (1 - DOMESTIC_SHARE)),
        "contributionPercentage": round_one(monthly_total / baseline * 100) if baseline > 0 else 0,
    })

    # Market context
    out.update({
        "currentInflation": market.current_inflation,
        "currentInterestRates": market.current_interest_rates,
        "marketVolatility": (label and label("market_volatility", market.market_volatility)) or market.market_volatility,
        "realReturn": max(0.0, round_one(rate - market.current_inflation)),
        "expectedCycles": max(1, round_int(years / MARKET_CYCLE_YEARS)),
    })

    return out

