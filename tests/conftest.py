from __future__ import annotations

import pytest

from scenario_content.core.assembler import ContentAssembler
from scenario_content.core.config import PACKAGE_LOCALES_DIR, Settings
from scenario_content.core.schemas import CalculatorInputs
from scenario_content.utils.cache import TTLCache
from scenario_content.utils.locale_resources import YamlLocaleResourceProvider


@pytest.fixture
def settings() -> Settings:
    return Settings(
        env="test",
        log_level="INFO",
        locales_dir=PACKAGE_LOCALES_DIR,
        default_locale="en",
        supported_locales=("en", "es", "pl"),
        locale_cache_ttl_seconds=60,
        current_inflation=3.2,
        current_interest_rates=5.25,
        market_volatility="moderate",
    )


@pytest.fixture
def provider(settings) -> YamlLocaleResourceProvider:
    return YamlLocaleResourceProvider(
        settings.locales_dir,
        default_locale=settings.default_locale,
        supported_locales=list(settings.supported_locales),
        cache=TTLCache(default_ttl_seconds=60),
    )


@pytest.fixture
def assembler(provider, settings) -> ContentAssembler:
    return ContentAssembler(provider=provider, settings=settings)


@pytest.fixture
def base_inputs() -> CalculatorInputs:
    return CalculatorInputs(initial_amount=10000, monthly_contribution=500, annual_return=7, time_horizon=20)
