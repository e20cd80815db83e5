from .client import (
    TrackerClientError,
    TrackerDecodeError,
    TrackerHTTPError,
    TrackerModelValidationError,
    TrackerParseError,
    TrackerRequestError,
    TrackerTransportError,
)

__all__ = [
    "TrackerClientError",
    "TrackerRequestError",
    "TrackerTransportError",
    "TrackerDecodeError",
    "TrackerParseError",
    "TrackerModelValidationError",
    "TrackerHTTPError",
]
