import httpx
import pytest
import respx
from httpx import Response
from tracker_api.core.client import (
    Connection,
    TrackerClientError,
    TrackerDecodeError,
    TrackerHTTPError,
    TrackerModelValidationError,
    TrackerParseError,
    TrackerRequestError,
    TrackerTransportError,
)
from tracker_api.models import Story

BASE = "https://tracker.test/services/v5"


@pytest.fixture
def conn():
    return Connection(token="mock-token", base_url=BASE)


def test_requires_token():
    with pytest.raises(ValueError):
        Connection(token="", base_url=BASE)


def test_requires_base_url():
    with pytest.raises(ValueError):
        Connection(token="t", base_url="")


def test_create_request_uppercases_method_and_stringifies_params(conn):
    req = conn.create_request("get", "/projects/1/stories", {"limit": 5})

    assert req.method == "GET"
    assert req.path == "/projects/1/stories"
    assert req.params == {"limit": "5"}
    assert req.headers == {}
    assert req.body is None


def test_create_request_rejects_relative_path(conn):
    with pytest.raises(TrackerRequestError):
        conn.create_request("GET", "projects/1")


def test_create_request_rejects_missing_method(conn):
    with pytest.raises(TrackerRequestError):
        conn.create_request("", "/projects/1")


@pytest.mark.asyncio
async def test_get_request_decodes_into_type(conn):
    async with respx.mock:
        route = respx.get(f"{BASE}/projects/1/stories/7").mock(
            return_value=Response(200, json={"id": 7, "name": "Login"})
        )

        async with conn:
            req = conn.create_request("GET", "/projects/1/stories/7")
            story, pagination = await conn.do(req, Story)

        assert route.called
        assert story == Story(id=7, name="Login")
        assert pagination.total == 0


@pytest.mark.asyncio
async def test_token_header_sent(conn):
    async with respx.mock:
        route = respx.get(f"{BASE}/me").mock(return_value=Response(200, json={}))

        async with conn:
            await conn.do(conn.create_request("GET", "/me"))

        sent = route.calls[0].request.headers
        assert sent.get("X-TrackerToken") == "mock-token"
        assert "Content-Type" not in sent


@pytest.mark.asyncio
async def test_pagination_headers_extracted(conn):
    async with respx.mock:
        respx.get(f"{BASE}/projects/1/stories").mock(
            return_value=Response(
                200,
                json=[{"id": 1}],
                headers={
                    "X-Tracker-Pagination-Total": "42",
                    "X-Tracker-Pagination-Limit": "1",
                    "X-Tracker-Pagination-Offset": "3",
                    "X-Tracker-Pagination-Returned": "1",
                },
            )
        )

        async with conn:
            req = conn.create_request("GET", "/projects/1/stories")
            _, pagination = await conn.do(req)

        assert pagination.total == 42
        assert pagination.limit == 1
        assert pagination.offset == 3
        assert pagination.returned == 1
        assert pagination.has_next


@pytest.mark.asyncio
async def test_no_result_type_skips_decoding(conn):
    async with respx.mock:
        respx.delete(f"{BASE}/projects/1/stories/5").mock(
            return_value=Response(
                200,
                text="<html>not json</html>",
                headers={"X-Tracker-Pagination-Total": "0"},
            )
        )

        async with conn:
            req = conn.create_request("DELETE", "/projects/1/stories/5")
            result, pagination = await conn.do(req)

        assert result is None
        assert pagination.total == 0


@pytest.mark.asyncio
async def test_body_and_headers_are_sent(conn):
    async with respx.mock:
        route = respx.put(f"{BASE}/projects/1/stories/5").mock(
            return_value=Response(200, json={"id": 5})
        )

        async with conn:
            req = conn.create_request("PUT", "/projects/1/stories/5")
            req.headers["Content-Type"] = "application/json"
            req.body = b'{"current_state":"delivered"}'
            await conn.do(req)

        sent = route.calls[0].request
        assert sent.headers["Content-Type"] == "application/json"
        assert sent.content == b'{"current_state":"delivered"}'


@pytest.mark.asyncio
async def test_404_raises_typed_error(conn):
    async with respx.mock:
        respx.get(f"{BASE}/projects/1/stories/999").mock(
            return_value=Response(
                404,
                json={
                    "code": "unfound_resource",
                    "kind": "error",
                    "error": "The object you tried to access could not be found.",
                    "possible_fix": "Check the id.",
                },
            )
        )

        async with conn:
            with pytest.raises(TrackerHTTPError) as exc:
                await conn.do(conn.create_request("GET", "/projects/1/stories/999"))

        assert exc.value.status_code == 404
        assert exc.value.code == "unfound_resource"
        assert exc.value.kind == "error"
        assert exc.value.possible_fix == "Check the id."
        assert "could not be found" in str(exc.value)


@pytest.mark.asyncio
async def test_400_carries_validation_errors(conn):
    async with respx.mock:
        respx.post(f"{BASE}/projects/1/stories").mock(
            return_value=Response(
                400,
                json={
                    "code": "invalid_parameter",
                    "kind": "error",
                    "error": "One or more request parameters was missing or invalid.",
                    "general_problem": "'name' must not be empty",
                    "validation_errors": [
                        {"field": "name", "problem": "Name cannot be blank"}
                    ],
                },
            )
        )

        async with conn:
            req = conn.create_request("POST", "/projects/1/stories")
            req.body = b"{}"
            with pytest.raises(TrackerHTTPError) as exc:
                await conn.do(req, Story)

        assert exc.value.status_code == 400
        assert exc.value.general_problem == "'name' must not be empty"
        assert exc.value.validation_errors[0]["field"] == "name"


@pytest.mark.asyncio
async def test_non_json_error_body_kept_as_text(conn):
    async with respx.mock:
        respx.get(f"{BASE}/me").mock(return_value=Response(502, text="Bad Gateway"))

        async with conn:
            with pytest.raises(TrackerHTTPError) as exc:
                await conn.do(conn.create_request("GET", "/me"))

        assert exc.value.status_code == 502
        assert exc.value.response_json is None
        assert exc.value.response_text == "Bad Gateway"
        assert exc.value.message == "request failed"


@pytest.mark.asyncio
async def test_connect_timeout_is_transport_error(conn):
    async with respx.mock:
        respx.get(f"{BASE}/me").mock(side_effect=httpx.ConnectTimeout("boom"))

        async with conn:
            with pytest.raises(TrackerTransportError) as exc:
                await conn.do(conn.create_request("GET", "/me"))

        assert isinstance(exc.value.__cause__, httpx.ConnectTimeout)
        assert not isinstance(exc.value, TrackerDecodeError)


@pytest.mark.asyncio
async def test_connect_error_is_transport_error(conn):
    async with respx.mock:
        respx.get(f"{BASE}/me").mock(side_effect=httpx.ConnectError("refused"))

        async with conn:
            with pytest.raises(TrackerTransportError):
                await conn.do(conn.create_request("GET", "/me"))


@pytest.mark.asyncio
async def test_non_json_response_raises_parse_error(conn):
    async with respx.mock:
        respx.get(f"{BASE}/projects/1/stories/1").mock(
            return_value=Response(200, text="<html>Not JSON</html>")
        )

        async with conn:
            with pytest.raises(TrackerParseError) as exc:
                await conn.do(conn.create_request("GET", "/projects/1/stories/1"), Story)

        assert "Expected JSON" in str(exc.value)
        assert isinstance(exc.value, TrackerDecodeError)


@pytest.mark.asyncio
async def test_wrong_shape_raises_model_validation_error(conn):
    async with respx.mock:
        respx.get(f"{BASE}/projects/1/stories/1").mock(
            return_value=Response(200, json={"id": "not-a-number"})
        )

        async with conn:
            with pytest.raises(TrackerModelValidationError) as exc:
                await conn.do(conn.create_request("GET", "/projects/1/stories/1"), Story)

        assert "Story" in str(exc.value)
        assert isinstance(exc.value, TrackerClientError)


@pytest.mark.asyncio
async def test_503_is_not_retried(conn):
    async with respx.mock:
        route = respx.get(f"{BASE}/me").mock(
            side_effect=[
                Response(503, json={"error": "Service Unavailable"}),
                Response(200, json={}),
            ]
        )

        async with conn:
            with pytest.raises(TrackerHTTPError):
                await conn.do(conn.create_request("GET", "/me"))

        assert route.call_count == 1


@pytest.mark.asyncio
async def test_injected_http_client_not_closed():
    http = httpx.AsyncClient(base_url=BASE)
    conn = Connection(token="t", base_url=BASE, http=http)
    await conn.aclose()

    assert not http.is_closed
    await http.aclose()
