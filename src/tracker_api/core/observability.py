from __future__ import annotations

import logging
from typing import Any, Dict

RESERVED_LOG_KEYS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}

DEFAULT_LOGGER_NAME = "tracker_api.observability"


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS and v is not None
    }


def log_event(event: str, logger: logging.Logger | None = None, **fields: Any) -> None:
    """
    Structured event on the observability logger.
    - Fields ride on the record via extra so LogfmtFormatter can render them.
    - None values and reserved LogRecord attributes are dropped.
    """
    log = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
    log.info(event, extra={"event": event, **_clean_fields(fields)})


__all__ = ["log_event", "DEFAULT_LOGGER_NAME"]
