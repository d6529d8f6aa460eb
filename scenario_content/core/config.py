from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml
from dotenv import load_dotenv

PACKAGE_LOCALES_DIR = str(Path(__file__).resolve().parent.parent / "locales")


@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str

    locales_dir: str
    default_locale: str
    supported_locales: Tuple[str, ...]
    locale_cache_ttl_seconds: int

    current_inflation: float
    current_interest_rates: float
    market_volatility: str


def _deep_get(d: Dict[str, Any], path: str, default=None):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def load_settings(config_path: str = "config.yaml") -> Settings:
    """
    Loads config.yaml + overrides from .env/environment variables.
    """
    load_dotenv()  # loads .env into env vars

    cfg: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

    # Empty env vars count as "not set" so they never mask config.yaml.
    def _env_or_cfg(key: str, cfg_path: str, default):
        v = os.getenv(key)
        if v is None:
            return _deep_get(cfg, cfg_path, default)
        v = v.strip()
        return _deep_get(cfg, cfg_path, default) if v == "" else v

    env = _env_or_cfg("APP_ENV", "app.env", "dev")
    log_level = _env_or_cfg("LOG_LEVEL", "app.log_level", "INFO")

    locales_dir = _env_or_cfg("LOCALES_DIR", "locales.dir", PACKAGE_LOCALES_DIR)
    default_locale = str(_env_or_cfg("DEFAULT_LOCALE", "locales.default", "en")).strip().lower()
    supported = _env_or_cfg("SUPPORTED_LOCALES", "locales.supported", ["en", "es", "pl"])
    if isinstance(supported, str):
        supported = [s for s in supported.split(",")]
    supported_locales = tuple(s.strip().lower() for s in supported if str(s).strip())
    locale_cache_ttl_seconds = int(_env_or_cfg("LOCALE_CACHE_TTL_SECONDS", "locales.cache_ttl_seconds", 3600))

    current_inflation = float(_env_or_cfg("CURRENT_INFLATION", "market.current_inflation", 3.2))
    current_interest_rates = float(_env_or_cfg("CURRENT_INTEREST_RATES", "market.current_interest_rates", 5.25))
    market_volatility = str(_env_or_cfg("MARKET_VOLATILITY", "market.volatility", "moderate")).strip().lower()

    if default_locale not in supported_locales:
        supported_locales = (default_locale,) + supported_locales

    return Settings(
        env=env,
        log_level=log_level,
        locales_dir=locales_dir,
        default_locale=default_locale,
        supported_locales=supported_locales,
        locale_cache_ttl_seconds=locale_cache_ttl_seconds,
        current_inflation=current_inflation,
        current_interest_rates=current_interest_rates,
        market_volatility=market_volatility,
    )


# Optional convenience singleton
SETTINGS = load_settings()
