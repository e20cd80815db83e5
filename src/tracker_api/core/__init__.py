"""Transport layer for tracker-api (independent of the resource models)."""

from .client import DEFAULT_BASE_URL, TOKEN_HEADER, Connection, TrackerRequest
from .config import create_connection_from_env, load_env_config
from .errors import (
    TrackerClientError,
    TrackerDecodeError,
    TrackerHTTPError,
    TrackerModelValidationError,
    TrackerParseError,
    TrackerRequestError,
    TrackerTransportError,
)
from .logging import LogfmtFormatter, setup_logging
from .observability import log_event
from .pagination import Pagination

__all__ = [
    # Transport
    "Connection",
    "TrackerRequest",
    "Pagination",
    "DEFAULT_BASE_URL",
    "TOKEN_HEADER",
    # Exceptions
    "TrackerClientError",
    "TrackerRequestError",
    "TrackerTransportError",
    "TrackerDecodeError",
    "TrackerParseError",
    "TrackerModelValidationError",
    "TrackerHTTPError",
    # Config helpers
    "create_connection_from_env",
    "load_env_config",
    # Logging
    "setup_logging",
    "LogfmtFormatter",
    "log_event",
]
