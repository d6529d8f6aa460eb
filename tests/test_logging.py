import logging

from scenario_content.utils.logging import (
    ContextFilter,
    SimpleStructuredFormatter,
    get_logger,
    set_locale,
    set_log_context,
)


def _format(msg: str) -> str:
    record = logging.LogRecord("scenario_content.test", logging.INFO, __file__, 1, msg, None, None)
    ContextFilter().filter(record)
    return SimpleStructuredFormatter().format(record)


def test_context_is_attached():
    set_log_context(request_id="req-1", locale="es", slug="invest-1-monthly-1-1percent-1years-emergency")
    line = _format("hello")
    assert "level=INFO" in line
    assert "request_id=req-1" in line
    assert "locale=es" in line
    assert "slug=invest-1-monthly-1-1percent-1years-emergency" in line
    assert line.endswith("msg=hello")

    set_locale("pl")
    assert "locale=pl" in _format("again")


def test_loggers_are_namespaced():
    assert get_logger("assembler").name == "scenario_content.assembler"
