from __future__ import annotations

from typing import Any, Dict, Optional, Union

from scenario_content.core.config import SETTINGS, Settings
from scenario_content.core.schemas import (
    SECTION_NAMES,
    CalculatorInputs,
    ContentRequest,
    ContentSections,
    GoalTag,
    MarketData,
)
from scenario_content.utils.finance import future_value as compute_future_value
from scenario_content.utils.finance import total_contributions as compute_total_contributions
from scenario_content.utils.goal_classifier import classify_goal
from scenario_content.utils.locale_resources import (
    ContentConfigurationError,
    LocaleResourceProvider,
    LocaleResourcesMissing,
    default_provider,
)
from scenario_content.utils.logging import get_logger, set_locale
from scenario_content.utils.metrics_engine import MarketAssumptions, compute_derived_metrics
from scenario_content.utils.template_engine import populate

logger = get_logger("assembler")


class ContentAssembler:
    """
    Turns calculator inputs into the eight localized narrative sections.

    Numbers are computed once per call and shared by every section; the
    locale only changes which templates and labels are used.
    """

    def __init__(
        self,
        provider: Optional[LocaleResourceProvider] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.provider = provider or default_provider()
        self.settings = settings or SETTINGS
        self.market = MarketAssumptions(
            current_inflation=self.settings.current_inflation,
            current_interest_rates=self.settings.current_interest_rates,
            market_volatility=self.settings.market_volatility,
        )

    def resolve_locale(self, locale: Optional[str]) -> str:
        loc = (locale or "").strip().lower()
        if loc and self.provider.has_locale(loc):
            return loc

        default = self.provider.default_locale
        if self.provider.has_locale(default):
            if loc != default:
                logger.warning("No resources for locale=%r; falling back to %s", locale, default)
            return default

        raise LocaleResourcesMissing(
            f"No content templates found for locale {locale!r} or default locale {default!r}"
        )

    def build_parameters(
        self,
        inputs: CalculatorInputs,
        locale: str,
        *,
        goal: Optional[Union[GoalTag, str]] = None,
        future_value: Optional[float] = None,
        total_contributions: Optional[float] = None,
        total_gains: Optional[float] = None,
    ) -> Dict[str, Any]:
        if goal is None:
            goal = classify_goal(inputs)
        goal_key = goal.value if isinstance(goal, GoalTag) else str(goal)

        fv = future_value or compute_future_value(
            inputs.initial_amount, inputs.monthly_contribution, inputs.annual_return, inputs.time_horizon
        )
        contributed = total_contributions or compute_total_contributions(
            inputs.initial_amount, inputs.monthly_contribution, inputs.time_horizon
        )
        gains = total_gains if total_gains is not None else fv - contributed

        metrics = compute_derived_metrics(
            inputs,
            current_future_value=fv,
            market=self.market,
            label=lambda group, key: self.provider.get_label(locale, group, key),
        )

        params: Dict[str, Any] = {
            "initialAmount": inputs.initial_amount,
            "monthlyContribution": inputs.monthly_contribution,
            "annualReturn": inputs.annual_return,
            "timeHorizon": inputs.time_horizon,
        }
        params.update(metrics)
        params.update({
            "futureValue": fv,
            "totalContributions": contributed,
            "totalGains": gains,
            "goal": self.provider.get_goal_label(locale, goal_key),
        })
        return params

    def _render(self, locale: str, name: str, params: Dict[str, Any]) -> str:
        template = self.provider.get_template(locale, name)
        if template is None:
            raise ContentConfigurationError(f"Template {name!r} missing for locale {locale!r} and its fallback")
        years_unit = self.provider.get_label(locale, "units", "years") or "years"
        return populate(template, params, years_unit=years_unit).strip()

    def generate(
        self,
        inputs: CalculatorInputs,
        locale: str = "en",
        *,
        goal: Optional[Union[GoalTag, str]] = None,
        future_value: Optional[float] = None,
        total_contributions: Optional[float] = None,
        total_gains: Optional[float] = None,
    ) -> ContentSections:
        used = self.resolve_locale(locale)
        set_locale(used)

        params = self.build_parameters(
            inputs,
            used,
            goal=goal,
            future_value=future_value,
            total_contributions=total_contributions,
            total_gains=total_gains,
        )
        sections = {name: self._render(used, name, params) for name in SECTION_NAMES}

        logger.info(
            "Generated content locale=%s goal=%s future_value=%.0f",
            used, params["goal"], params["futureValue"],
        )
        return ContentSections(
            **sections,
            market_data=MarketData(
                inflation=params["currentInflation"],
                interest_rate=params["currentInterestRates"],
                volatility=self.market.market_volatility,
            ),
        )

    def generate_section(self, inputs: CalculatorInputs, section: str, locale: str = "en", **kwargs) -> str:
        if section not in SECTION_NAMES:
            raise ValueError(f"Unknown content section: {section}")
        used = self.resolve_locale(locale)
        params = self.build_parameters(inputs, used, **kwargs)
        return self._render(used, section, params)

    def generate_market_context(self, inputs: CalculatorInputs, locale: str = "en", **kwargs) -> str:
        return self.generate_section(inputs, "market_context", locale, **kwargs)

    def run(self, req: ContentRequest) -> ContentSections:
        return self.generate(
            req.inputs,
            req.locale,
            goal=req.goal,
            future_value=req.future_value,
            total_contributions=req.total_contributions,
            total_gains=req.total_gains,
        )


def generate_content(inputs: CalculatorInputs, locale: str = "en", **kwargs) -> ContentSections:
    return ContentAssembler().generate(inputs, locale, **kwargs)
