import logging
from typing import Any, Iterator, Tuple

# Attributes that Connection attaches to each tracker_call record, in output order.
CALL_FIELDS = (
    "request_id",
    "method",
    "endpoint",
    "status",
    "duration_ms",
    "error_type",
)


def _needs_quotes(text: str) -> bool:
    return not text or any(ch in text for ch in ' ="')


def render_value(value: Any) -> str:
    if isinstance(value, (bool, int, float)):
        return str(value)
    text = str(value)
    if _needs_quotes(text):
        return '"' + text.replace('"', '\\"') + '"'
    return text


class LogfmtFormatter(logging.Formatter):
    """Render a record as one `key=value` line; call fields are appended when set."""

    def _pairs(self, record: logging.LogRecord) -> Iterator[Tuple[str, Any]]:
        yield "level", record.levelname.lower()
        yield "logger", record.name
        event = record.getMessage()
        if event:
            yield "event", event
        for name in CALL_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                yield name, value
        if record.exc_info and record.exc_info[0] is not None:
            yield "exc_type", record.exc_info[0].__name__

    def format(self, record: logging.LogRecord) -> str:
        return " ".join(f"{k}={render_value(v)}" for k, v in self._pairs(record))


def setup_logging(level: str = "INFO", logger_name: str = "tracker_api") -> None:
    """
    Send the package's log output to stderr as logfmt.
    Only the package logger is touched; calling again replaces the handler.
    """
    log = logging.getLogger(logger_name)
    for existing in list(log.handlers):
        log.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.setFormatter(LogfmtFormatter())
    log.addHandler(handler)
    log.setLevel(getattr(logging, level.upper(), logging.INFO))


__all__ = ["setup_logging", "LogfmtFormatter", "CALL_FIELDS", "render_value"]
