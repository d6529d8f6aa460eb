from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


# -------------------------
# Inputs
# -------------------------

class GoalTag(str, Enum):
    RETIREMENT = "retirement"
    WEALTH = "wealth"
    EMERGENCY = "emergency"
    HOUSE = "house"
    EDUCATION = "education"
    VACATION = "vacation"
    STARTER = "starter"
    INVESTMENT = "investment"


# Upper bounds keep every projection a finite float (worst case ~1e57).
MAX_INPUT_AMOUNT = 1_000_000_000_000
MAX_INPUT_RETURN = 100
MAX_INPUT_HORIZON = 100


class CalculatorInputs(BaseModel):
    """The four numbers a scenario is built from. Returns are percents (7 == 7%)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    initial_amount: float = Field(..., ge=0, le=MAX_INPUT_AMOUNT, allow_inf_nan=False, alias="initialAmount")
    monthly_contribution: float = Field(..., ge=0, le=MAX_INPUT_AMOUNT, allow_inf_nan=False, alias="monthlyContribution")
    annual_return: float = Field(..., ge=0, le=MAX_INPUT_RETURN, allow_inf_nan=False, alias="annualReturn")
    time_horizon: int = Field(..., ge=1, le=MAX_INPUT_HORIZON, alias="timeHorizon")


class ScenarioParams(CalculatorInputs):
    # Plain string: decoded slugs keep whatever tag they carry.
    goal: str
    slug: str

    def inputs(self) -> CalculatorInputs:
        return CalculatorInputs(
            initial_amount=self.initial_amount,
            monthly_contribution=self.monthly_contribution,
            annual_return=self.annual_return,
            time_horizon=self.time_horizon,
        )


class ContentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    inputs: CalculatorInputs
    locale: str = "en"
    goal: Optional[str] = None
    future_value: Optional[float] = Field(default=None, alias="futureValue")
    total_contributions: Optional[float] = Field(default=None, alias="totalContributions")
    total_gains: Optional[float] = Field(default=None, alias="totalGains")


# -------------------------
# Outputs
# -------------------------

SECTION_NAMES = (
    "investment_overview",
    "growth_projection",
    "investment_insights",
    "strategy_analysis",
    "comparative_scenarios",
    "community_insights",
    "optimization_tips",
    "market_context",
)


class MarketData(BaseModel):
    inflation: float
    interest_rate: float
    volatility: str


class ContentSections(BaseModel):
    investment_overview: str
    growth_projection: str
    investment_insights: str
    strategy_analysis: str
    comparative_scenarios: str
    community_insights: str
    optimization_tips: str
    market_context: str
    market_data: Optional[MarketData] = None

    @field_validator(*SECTION_NAMES)
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("content section must not be empty")
        return v

    def sections(self) -> Dict[str, str]:
        return {name: getattr(self, name) for name in SECTION_NAMES}


class ScenarioMetadata(BaseModel):
    name: str
    description: str
    keywords: list[str] = Field(default_factory=list)


# -------------------------
# Errors
# -------------------------

class ErrorEnvelope(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None
    retriable: bool = False
