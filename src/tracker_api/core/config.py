from __future__ import annotations

import os
from typing import Tuple

from . import client as _client
from .client import DEFAULT_BASE_URL, Connection


def load_env_config(*, use_dotenv: bool = True) -> Tuple[str, str]:
    """Load Tracker base URL and API token from environment (optional .env)."""
    if use_dotenv:
        _client.load_dotenv()
    base_url = os.getenv("TRACKER_BASE_URL", "").strip() or DEFAULT_BASE_URL
    token = os.getenv("TRACKER_API_TOKEN", "").strip()
    return base_url, token


def create_connection_from_env(**kwargs) -> Connection:
    """Create a Connection from environment variables."""
    base_url, token = load_env_config()
    if not token:
        raise ValueError("Missing TRACKER_API_TOKEN in environment.")
    return Connection(token=token, base_url=base_url, **kwargs)


__all__ = ["load_env_config", "create_connection_from_env"]
