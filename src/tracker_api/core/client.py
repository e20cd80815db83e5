import logging
import os
import time
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

import httpx
from dotenv import load_dotenv
from pydantic import TypeAdapter, ValidationError

from .observability import log_event
from .pagination import Pagination

T = TypeVar("T")

DEFAULT_BASE_URL = "https://www.pivotaltracker.com/services/v5"
TOKEN_HEADER = "X-TrackerToken"


class TrackerClientError(Exception):
    """Base error for client failures."""


class TrackerRequestError(TrackerClientError):
    """The request could not be built; nothing was sent."""


class TrackerTransportError(TrackerClientError):
    """The request never produced a response (network, timeout, protocol)."""


class TrackerDecodeError(TrackerClientError):
    """A response arrived but its body could not be read as the expected type."""


class TrackerParseError(TrackerDecodeError):
    pass


class TrackerModelValidationError(TrackerDecodeError):
    pass


class TrackerHTTPError(TrackerClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        message: str,
        code: Optional[str] = None,
        kind: Optional[str] = None,
        general_problem: Optional[str] = None,
        possible_fix: Optional[str] = None,
        validation_errors: Optional[List[Dict[str, Any]]] = None,
        response_json: Optional[Dict[str, Any]] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(f"{status_code} {method} {url}: {message}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.message = message
        self.code = code
        self.kind = kind
        self.general_problem = general_problem
        self.possible_fix = possible_fix
        self.validation_errors = validation_errors or []
        self.response_json = response_json
        self.response_text = response_text


@dataclass
class TrackerRequest:
    """
    A request assembled but not yet sent.
    Mutable so a JSON body can be attached after construction.
    """

    method: str
    path: str
    params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None


@lru_cache(maxsize=None)
def _adapter(result_type: Any) -> TypeAdapter:
    return TypeAdapter(result_type)


def _type_name(result_type: Any) -> str:
    return getattr(result_type, "__name__", None) or repr(result_type)


class Connection:
    """
    HTTP transport for the Tracker v5 JSON API.
    - Handles auth token, base URL, timeouts
    - create_request() validates and assembles, do() sends and decodes
    - Never retries; every failure is raised to the caller
    """

    def __init__(
        self,
        *,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        request_id: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        base_url = (base_url or "").rstrip("/")
        token = token or ""

        if not base_url:
            raise ValueError("base_url must be provided.")
        if not token:
            raise ValueError("token must be provided.")

        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.request_id = request_id
        self.log = logger or logging.getLogger("tracker_api.observability")

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Accept": "application/json",
                TOKEN_HEADER: token,
            },
            timeout=timeout_seconds,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "Connection":
        load_dotenv()
        base_url = os.getenv("TRACKER_BASE_URL", "").strip() or DEFAULT_BASE_URL
        token = os.getenv("TRACKER_API_TOKEN", "").strip()
        return cls(token=token, base_url=base_url, **kwargs)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "Connection":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def create_request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
    ) -> TrackerRequest:
        method = (method or "").upper()
        if not method:
            raise TrackerRequestError("HTTP method must be provided.")
        if not path.startswith("/"):
            raise TrackerRequestError(f"Path must be absolute, got {path!r}")

        try:
            httpx.URL(self.base_url + path)
        except httpx.InvalidURL as exc:
            raise TrackerRequestError(f"Invalid URL for {method} {path}: {exc}") from exc

        return TrackerRequest(
            method=method,
            path=path,
            params={k: str(v) for k, v in (params or {}).items()},
        )

    async def do(
        self,
        request: TrackerRequest,
        result_type: Optional[Type[T]] = None,
    ) -> Tuple[Optional[T], Pagination]:
        """
        Execute-and-decode.
        - Raises TrackerTransportError if no response was received
        - Raises TrackerHTTPError on non-2xx responses
        - With result_type None the body is ignored and (None, pagination) returned
        - Otherwise the JSON body is validated into result_type
        """
        start = time.perf_counter()
        status: Any = "exception"
        error_type: Optional[str] = None

        try:
            resp = await self.http.request(
                request.method,
                request.path,
                params=request.params or None,
                headers=request.headers or None,
                content=request.body,
            )
            status = resp.status_code
        except httpx.TimeoutException as exc:
            error_type = type(exc).__name__
            raise TrackerTransportError(
                f"Timeout calling {request.method} {request.path}: {exc}"
            ) from exc
        except httpx.HTTPError as exc:
            error_type = type(exc).__name__
            raise TrackerTransportError(
                f"Network error calling {request.method} {request.path}: {exc}"
            ) from exc
        finally:
            log_event(
                "tracker_call",
                self.log,
                request_id=self.request_id,
                method=request.method,
                endpoint=request.path,
                status=status,
                duration_ms=int((time.perf_counter() - start) * 1000),
                error_type=error_type,
            )

        if resp.status_code < 200 or resp.status_code >= 300:
            raise self._to_http_error(resp, method=request.method)

        pagination = Pagination.from_headers(resp.headers)
        if result_type is None:
            return None, pagination

        return self._decode(resp, result_type), pagination

    def _decode(self, resp: httpx.Response, result_type: Any) -> Any:
        try:
            data = resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise TrackerParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

        try:
            return _adapter(result_type).validate_python(data)
        except ValidationError as exc:
            raise TrackerModelValidationError(
                f"Response did not match {_type_name(result_type)}: {exc}"
            ) from exc

    def _to_http_error(self, resp: httpx.Response, *, method: str) -> TrackerHTTPError:
        url = str(resp.request.url)
        response_json: Optional[Dict[str, Any]] = None
        response_text: Optional[str] = None
        message = "request failed"

        try:
            parsed = resp.json()
        except ValueError:
            parsed = None
            response_text = (resp.text or "")[:500]

        if isinstance(parsed, dict):
            response_json = parsed
        fields = response_json or {}
        message = fields.get("error") or fields.get("general_problem") or message
        validation_errors = fields.get("validation_errors")

        return TrackerHTTPError(
            status_code=resp.status_code,
            method=method,
            url=url,
            message=message,
            code=fields.get("code"),
            kind=fields.get("kind"),
            general_problem=fields.get("general_problem"),
            possible_fix=fields.get("possible_fix"),
            validation_errors=(
                validation_errors if isinstance(validation_errors, list) else None
            ),
            response_json=response_json,
            response_text=response_text,
        )
