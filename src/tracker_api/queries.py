"""
Query-parameter builders, one per list endpoint.

Each query is a frozen value object whose only behaviour is query(),
which returns the string parameters to send. Unset fields, zero numbers,
empty strings and empty lists are left out of the mapping.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Sequence, Union

from .models import IterationScope

Timestamp = Union[int, datetime]


def _set_str(params: Dict[str, str], key: str, value: Optional[str]) -> None:
    if value:
        params[key] = value.value if isinstance(value, Enum) else str(value)


def _set_int(params: Dict[str, str], key: str, value: Optional[int]) -> None:
    if value:
        params[key] = str(int(value))


def _set_list(
    params: Dict[str, str], key: str, values: Optional[Union[str, Sequence[str]]]
) -> None:
    if not values:
        return
    # a bare string is already one expression, not a list of terms
    params[key] = values if isinstance(values, str) else " ".join(values)


def _epoch_millis(value: Optional[Timestamp]) -> Optional[int]:
    if isinstance(value, datetime):
        return int(value.timestamp() * 1000)
    return value


@dataclass(frozen=True)
class IterationsQuery:
    scope: Optional[IterationScope] = None
    label: Optional[str] = None
    limit: Optional[int] = None
    offset: Optional[int] = None

    def query(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        _set_str(params, "scope", self.scope)
        _set_str(params, "label", self.label)
        _set_int(params, "limit", self.limit)
        _set_int(params, "offset", self.offset)
        return params


@dataclass(frozen=True)
class StoriesQuery:
    # filter terms are joined with spaces into a single search expression
    date_format: Optional[str] = None
    filter: Optional[Union[str, Sequence[str]]] = None
    label: Optional[str] = None
    with_state: Optional[str] = None
    limit: Optional[int] = None
    offset: Optional[int] = None

    def query(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        _set_str(params, "date_format", self.date_format)
        _set_list(params, "filter", self.filter)
        _set_str(params, "with_label", self.label)
        _set_str(params, "with_state", self.with_state)
        _set_int(params, "limit", self.limit)
        _set_int(params, "offset", self.offset)
        return params


@dataclass(frozen=True)
class ActivityQuery:
    limit: Optional[int] = None
    offset: Optional[int] = None
    occurred_before: Optional[Timestamp] = None
    occurred_after: Optional[Timestamp] = None
    since_version: Optional[int] = None

    def query(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        _set_int(params, "limit", self.limit)
        _set_int(params, "offset", self.offset)
        _set_int(params, "occurred_before", _epoch_millis(self.occurred_before))
        _set_int(params, "occurred_after", _epoch_millis(self.occurred_after))
        _set_int(params, "since_version", self.since_version)
        return params


@dataclass(frozen=True)
class TaskQuery:
    limit: Optional[int] = None
    offset: Optional[int] = None
    fields: Optional[str] = None

    def query(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        _set_int(params, "limit", self.limit)
        _set_int(params, "offset", self.offset)
        _set_str(params, "fields", self.fields)
        return params


@dataclass(frozen=True)
class CommentsQuery:
    limit: Optional[int] = None
    offset: Optional[int] = None
    fields: Optional[str] = None

    def query(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        _set_int(params, "limit", self.limit)
        _set_int(params, "offset", self.offset)
        _set_str(params, "fields", self.fields)
        return params


__all__ = [
    "IterationsQuery",
    "StoriesQuery",
    "ActivityQuery",
    "TaskQuery",
    "CommentsQuery",
]
