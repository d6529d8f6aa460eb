from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

# Context variables for structured logging
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")
locale_var: ContextVar[str] = ContextVar("locale", default="-")
slug_var: ContextVar[str] = ContextVar("slug", default="-")


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        record.locale = locale_var.get()
        record.slug = slug_var.get()
        return True


class SimpleStructuredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
        msg = record.getMessage()
        return (
            f"{ts} level={record.levelname} logger={record.name} "
            f"request_id={getattr(record, 'request_id', '-')} locale={getattr(record, 'locale', '-')} "
            f"slug={getattr(record, 'slug', '-')} "
            f"msg={msg}"
        )


def setup_logging(level: str = "INFO") -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(lvl)

    # Replace handlers (avoid duplicate logs when the CLI is re-entered)
    root.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(lvl)
    handler.addFilter(ContextFilter())
    handler.setFormatter(SimpleStructuredFormatter())

    root.addHandler(handler)


def set_log_context(
    *, request_id: Optional[str] = None, locale: Optional[str] = None, slug: Optional[str] = None
) -> None:
    if request_id is not None:
        request_id_var.set(request_id)
    if locale is not None:
        locale_var.set(locale)
    if slug is not None:
        slug_var.set(slug)


def set_locale(locale: str) -> None:
    locale_var.set(locale)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"scenario_content.{name}")
