from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from scenario_content.core.schemas import SECTION_NAMES, CalculatorInputs, GoalTag
from scenario_content.utils.locale_resources import LocaleResourceProvider
from scenario_content.utils.metrics_engine import compute_derived_metrics
from scenario_content.utils.template_engine import find_placeholders

BASE_PARAMETERS = {
    "initialAmount", "monthlyContribution", "annualReturn", "timeHorizon",
    "futureValue", "totalContributions", "totalGains", "goal",
}

_PROBE = CalculatorInputs(initial_amount=10000, monthly_contribution=500, annual_return=7, time_horizon=20)


class ValidationIssue(BaseModel):
    level: str  # ERROR | WARN | INFO
    message: str
    location: Optional[str] = None


class ValidationReport(BaseModel):
    ok: bool
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)
    infos: List[ValidationIssue] = Field(default_factory=list)

    def add_error(self, msg: str, location: Optional[str] = None) -> None:
        self.errors.append(ValidationIssue(level="ERROR", message=msg, location=location))

    def add_warning(self, msg: str, location: Optional[str] = None) -> None:
        self.warnings.append(ValidationIssue(level="WARN", message=msg, location=location))

    def add_info(self, msg: str, location: Optional[str] = None) -> None:
        self.infos.append(ValidationIssue(level="INFO", message=msg, location=location))

    def finalize(self) -> "ValidationReport":
        self.ok = len(self.errors) == 0
        return self


def known_parameters() -> set:
    return BASE_PARAMETERS | set(compute_derived_metrics(_PROBE))


def validate_locale_resources(provider: LocaleResourceProvider, locale: str) -> ValidationReport:
    """
    Templates that only resolve through the default locale are reported as
    warnings; templates missing everywhere or using unknown placeholders are errors.
    """
    report = ValidationReport(ok=True)

    if not provider.has_locale(locale):
        report.add_error("No template set for locale.", location=locale)
        return report.finalize()

    known = known_parameters()
    for name in SECTION_NAMES:
        where = f"{locale}:templates.{name}"
        own = provider.get_label(locale, "templates", name)
        default = provider.get_label(provider.default_locale, "templates", name)
        if own is None:
            report.add_error("Template missing.", location=where)
            continue
        if locale != provider.default_locale and own == default:
            report.add_warning("Template only available from the default locale.", location=where)

        for placeholder in find_placeholders(own):
            if placeholder not in known:
                report.add_error(f"Unknown placeholder '{placeholder}'.", location=where)

    for tag in GoalTag:
        label = provider.get_label(locale, "goals", tag.value)
        if label is None:
            report.add_warning(f"Goal label missing for '{tag.value}'.", location=f"{locale}:goals")

    return report.finalize()


def validate_all_locales(provider: LocaleResourceProvider) -> Dict[str, ValidationReport]:
    return {loc: validate_locale_resources(provider, loc) for loc in provider.available_locales()}
