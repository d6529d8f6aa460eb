from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol

import yaml

from scenario_content.core.config import SETTINGS
from scenario_content.utils.cache import TTLCache
from scenario_content.utils.logging import get_logger

logger = get_logger("locale_resources")

REQUIRED_GROUPS = ["goals", "templates"]
OPTIONAL_GROUPS = ["risk_categories", "risk_levels", "market_volatility", "units"]

# Free-form goal names seen in stored scenarios -> goal tag
GOAL_ALIASES: Dict[str, str] = {
    "retirement planning": "retirement",
    "home purchase": "house",
    "emergency fund": "emergency",
    "wealth building": "wealth",
    "wealth-building": "wealth",
    "general investment": "investment",
    "general": "investment",
}


class ContentConfigurationError(RuntimeError):
    """A deployment asset (locale file, template set) is missing or broken."""


class LocaleResourcesMissing(ContentConfigurationError):
    pass


class LocaleResourceProvider(Protocol):
    default_locale: str

    def has_locale(self, locale: str) -> bool: ...

    def available_locales(self) -> List[str]: ...

    def get_template(self, locale: str, name: str) -> Optional[str]: ...

    def get_goal_label(self, locale: str, goal: str) -> str: ...

    def get_label(self, locale: str, group: str, key: str) -> Optional[str]: ...


def normalize_goal(goal: Optional[str]) -> str:
    if not goal:
        return "investment"
    g = goal.strip().lower()
    return GOAL_ALIASES.get(g, g)


def _group(doc: Optional[Mapping[str, Any]], group: str) -> Mapping[str, Any]:
    if not doc:
        return {}
    value = doc.get(group)
    return value if isinstance(value, Mapping) else {}


class _FallbackLookups:
    """Per-entry lookups that fall back to the default locale."""

    default_locale: str

    def _document(self, locale: str) -> Optional[Mapping[str, Any]]:
        raise NotImplementedError

    def has_locale(self, locale: str) -> bool:
        return bool(_group(self._document(locale), "templates"))

    def get_label(self, locale: str, group: str, key: str) -> Optional[str]:
        for loc in (locale, self.default_locale):
            value = _group(self._document(loc), group).get(key)
            if isinstance(value, str) and value.strip():
                return value
        return None

    def get_template(self, locale: str, name: str) -> Optional[str]:
        tpl = self.get_label(locale, "templates", name)
        if tpl is None:
            return None
        if _group(self._document(locale), "templates").get(name) != tpl:
            logger.warning("Template %s missing for locale=%s; using %s", name, locale, self.default_locale)
        return tpl

    def get_goal_label(self, locale: str, goal: str) -> str:
        key = normalize_goal(goal)
        label = self.get_label(locale, "goals", key)
        # Unknown tags (e.g. forged slugs) are shown as-is
        return label if label is not None else goal


class InMemoryLocaleResourceProvider(_FallbackLookups):
    def __init__(self, documents: Mapping[str, Mapping[str, Any]], default_locale: str = "en") -> None:
        self._documents = {k.lower(): v for k, v in documents.items()}
        self.default_locale = default_locale

    def _document(self, locale: str) -> Optional[Mapping[str, Any]]:
        return self._documents.get((locale or "").lower())

    def available_locales(self) -> List[str]:
        return sorted(self._documents)


def load_locale_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Locale file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        doc = yaml.safe_load(f) or {}

    if not isinstance(doc, dict):
        raise ContentConfigurationError(f"Locale file must be a mapping: {path}")
    missing = [g for g in REQUIRED_GROUPS if not isinstance(doc.get(g), dict)]
    if missing:
        raise ContentConfigurationError(f"Locale file {path} missing groups: {missing}")
    return doc


class YamlLocaleResourceProvider(_FallbackLookups):
    """
    Reads ``<locales_dir>/<locale>.yaml`` and keeps the parsed documents in a
    TTLCache. Nothing here writes to the files.
    """

    def __init__(
        self,
        locales_dir: Optional[str] = None,
        *,
        default_locale: Optional[str] = None,
        supported_locales: Optional[List[str]] = None,
        cache: Optional[TTLCache] = None,
    ) -> None:
        self.locales_dir = Path(locales_dir or SETTINGS.locales_dir)
        self.default_locale = (default_locale or SETTINGS.default_locale).lower()
        self.supported_locales = [s.lower() for s in (supported_locales or SETTINGS.supported_locales)]
        self.cache = cache or TTLCache(default_ttl_seconds=SETTINGS.locale_cache_ttl_seconds)

    def _load(self, locale: str) -> Optional[Dict[str, Any]]:
        path = self.locales_dir / f"{locale}.yaml"
        try:
            doc = load_locale_file(path)
        except FileNotFoundError:
            logger.info("No locale file for locale=%s in %s", locale, self.locales_dir)
            return None
        logger.info("Loaded locale resources: %s", path)
        return doc

    def _document(self, locale: str) -> Optional[Mapping[str, Any]]:
        loc = (locale or "").strip().lower()
        if not loc or loc not in self.supported_locales:
            return None
        return self.cache.get_or_load(f"locale:{loc}", lambda: self._load(loc))

    def available_locales(self) -> List[str]:
        return [loc for loc in self.supported_locales if (self.locales_dir / f"{loc}.yaml").exists()]


_DEFAULT_PROVIDER: Optional[YamlLocaleResourceProvider] = None


def default_provider() -> YamlLocaleResourceProvider:
    """Process-wide provider over the configured locales directory."""
    global _DEFAULT_PROVIDER
    if _DEFAULT_PROVIDER is None:
        _DEFAULT_PROVIDER = YamlLocaleResourceProvider()
    return _DEFAULT_PROVIDER
