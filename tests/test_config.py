import pytest

from scenario_content.core.config import PACKAGE_LOCALES_DIR, load_settings

ENV_KEYS = (
    "APP_ENV", "LOG_LEVEL", "LOCALES_DIR", "DEFAULT_LOCALE", "SUPPORTED_LOCALES",
    "LOCALE_CACHE_TTL_SECONDS", "CURRENT_INFLATION", "CURRENT_INTEREST_RATES", "MARKET_VOLATILITY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_config(tmp_path):
    s = load_settings(str(tmp_path / "missing.yaml"))
    assert s.env == "dev"
    assert s.locales_dir == PACKAGE_LOCALES_DIR
    assert s.default_locale == "en"
    assert s.supported_locales == ("en", "es", "pl")
    assert s.locale_cache_ttl_seconds == 3600
    assert s.current_inflation == 3.2
    assert s.current_interest_rates == 5.25
    assert s.market_volatility == "moderate"


def test_config_file_values(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "locales:\n  default: es\n  supported: [en, pl]\n  cache_ttl_seconds: 5\n"
        "market:\n  current_inflation: 2.5\n  volatility: Elevated\n",
        encoding="utf-8",
    )
    s = load_settings(str(cfg))
    assert s.default_locale == "es"
    assert s.supported_locales == ("es", "en", "pl")
    assert s.locale_cache_ttl_seconds == 5
    assert s.current_inflation == 2.5
    assert s.market_volatility == "elevated"


def test_env_overrides_config(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("locales:\n  default: en\n", encoding="utf-8")
    monkeypatch.setenv("SUPPORTED_LOCALES", "EN, pl,")
    monkeypatch.setenv("CURRENT_INTEREST_RATES", "4.75")
    monkeypatch.setenv("DEFAULT_LOCALE", "")

    s = load_settings(str(cfg))
    assert s.default_locale == "en"
    assert s.supported_locales == ("en", "pl")
    assert s.current_interest_rates == 4.75
