from __future__ import annotations

import asyncio
import base64
import json
import logging

import httpx
import pytest

from nordnet_client.config_types import ClientConfig, RequestOptions
from nordnet_client.errors import ErrorKind, NordnetError
from nordnet_client.transport import Transport, build_url


def _transport(handler, **overrides) -> Transport:
    values = {"base_url": "https://api.test.com", "timeout_ms": 5000, "session_id": "test-session"}
    values.update(overrides)
    return Transport(ClientConfig(**values), transport=httpx.MockTransport(handler))


def _recorder(response: httpx.Response | None = None):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return response if response is not None else httpx.Response(200, json=[])

    return seen, handler


def _basic(token: str) -> str:
    return "Basic " + base64.b64encode(f"{token}:{token}".encode()).decode()


@pytest.mark.asyncio
async def test_get_returns_decoded_body() -> None:
    body = {"accid": 123, "accno": "123456"}
    seen, handler = _recorder(httpx.Response(200, json=body))
    t = _transport(handler)

    result = await t.get("/accounts")

    assert result == body
    assert seen[0].method == "GET"
    assert str(seen[0].url) == "https://api.test.com/accounts"
    assert seen[0].content == b""


@pytest.mark.asyncio
async def test_query_parameters_are_appended() -> None:
    seen, handler = _recorder()
    t = _transport(handler)

    await t.get("/accounts", RequestOptions(params={"limit": 10, "offset": 20}))

    assert str(seen[0].url) == "https://api.test.com/accounts?limit=10&offset=20"


@pytest.mark.asyncio
async def test_array_params_repeat_key_in_order() -> None:
    seen, handler = _recorder()
    t = _transport(handler)

    await t.get("/instrument_search/query/stocklist", RequestOptions(params={"country": ["SE", "NO", "DK"]}))

    assert seen[0].url.params.get_list("country") == ["SE", "NO", "DK"]


def test_build_url_serializes_scalars_objects_and_skips_none() -> None:
    url = build_url(
        "https://api.test.com",
        "/x",
        {"flag": True, "off": False, "skip": None, "leverage": {"min": 1, "max": 5}, "n": 3},
    )
    params = httpx.URL(url).params

    assert params["flag"] == "true"
    assert params["off"] == "false"
    assert "skip" not in params
    assert json.loads(params["leverage"]) == {"min": 1, "max": 5}
    assert params["n"] == "3"


def test_build_url_without_params_has_no_query_string() -> None:
    assert build_url("https://api.test.com", "/accounts", {}) == "https://api.test.com/accounts"
    assert build_url("https://api.test.com", "/accounts", {"a": None}) == "https://api.test.com/accounts"


@pytest.mark.asyncio
async def test_authorization_header_uses_token_twice() -> None:
    seen, handler = _recorder()
    t = _transport(handler, session_id="T1")

    await t.get("/accounts")

    assert seen[0].headers["Authorization"] == _basic("T1")
    assert seen[0].url.query == b""


@pytest.mark.asyncio
async def test_credential_is_read_per_request() -> None:
    seen, handler = _recorder()
    t = _transport(handler, session_id=None)

    await t.get("/accounts")
    t.set_session_id("S1")
    await t.get("/accounts")
    t.set_session_id("S2")
    await t.get("/accounts")
    t.clear_session()
    await t.get("/accounts")

    assert "Authorization" not in seen[0].headers
    assert seen[1].headers["Authorization"] == _basic("S1")
    assert seen[2].headers["Authorization"] == _basic("S2")
    assert "Authorization" not in seen[3].headers


@pytest.mark.asyncio
async def test_default_and_per_call_headers() -> None:
    seen, handler = _recorder()
    t = _transport(handler, language="sv", headers={"X-App": "base", "X-Keep": "1"})

    await t.get("/accounts", RequestOptions(headers={"X-App": "override"}))

    headers = seen[0].headers
    assert headers["Accept-Language"] == "sv"
    assert headers["Accept"] == "application/json"
    assert headers["Content-Type"] == "application/json"
    assert headers["X-App"] == "override"
    assert headers["X-Keep"] == "1"


@pytest.mark.asyncio
async def test_per_call_headers_replace_defaults_in_any_case() -> None:
    seen, handler = _recorder()
    t = _transport(handler, session_id="T1", headers={"x-app": "base"})

    await t.get(
        "/accounts",
        RequestOptions(headers={"accept-language": "sv", "X-APP": "call", "authorization": "Bearer other"}),
    )

    headers = seen[0].headers
    assert headers.get_list("Accept-Language") == ["sv"]
    assert headers.get_list("X-App") == ["call"]
    assert headers.get_list("Authorization") == [_basic("T1")]


@pytest.mark.asyncio
async def test_post_serializes_body_as_json() -> None:
    seen, handler = _recorder(httpx.Response(200, json={"order_id": 456}))
    t = _transport(handler)

    result = await t.post("/orders", {"side": "BUY", "volume": 100})

    assert result == {"order_id": 456}
    assert seen[0].method == "POST"
    assert json.loads(seen[0].content) == {"side": "BUY", "volume": 100}


@pytest.mark.asyncio
async def test_empty_body_differs_from_no_body() -> None:
    seen, handler = _recorder()
    t = _transport(handler)

    await t.put("/login")
    await t.put("/login", {})

    assert seen[0].content == b""
    assert seen[1].content == b"{}"


@pytest.mark.asyncio
async def test_no_content_returns_none_without_decoding() -> None:
    _, handler = _recorder(httpx.Response(204, content=b"definitely not json"))
    t = _transport(handler)

    assert await t.delete("/accounts/1/orders/2") is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "kind"),
    [
        (400, ErrorKind.BAD_REQUEST),
        (401, ErrorKind.AUTHENTICATION),
        (403, ErrorKind.AUTHORIZATION),
        (404, ErrorKind.NOT_FOUND),
        (429, ErrorKind.RATE_LIMIT),
        (503, ErrorKind.SERVICE_UNAVAILABLE),
        (409, ErrorKind.API),
        (500, ErrorKind.API),
        (502, ErrorKind.API),
    ],
)
async def test_status_classification(status: int, kind: ErrorKind) -> None:
    _, handler = _recorder(httpx.Response(status, json={"message": "nope"}))
    t = _transport(handler)

    with pytest.raises(NordnetError) as exc_info:
        await t.get("/accounts")

    err = exc_info.value
    assert err.kind is kind
    assert err.status_code == status
    assert str(err) == "nope"
    assert err.body == {"message": "nope"}


@pytest.mark.asyncio
async def test_rate_limit_carries_retry_after() -> None:
    response = httpx.Response(429, headers={"Retry-After": "60"}, json={"message": "Too many requests"})
    _, handler = _recorder(response)
    t = _transport(handler)

    with pytest.raises(NordnetError) as exc_info:
        await t.get("/accounts")

    err = exc_info.value
    assert err.kind is ErrorKind.RATE_LIMIT
    assert err.message == "Too many requests"
    assert err.retry_after == 60
    assert err.is_retryable


@pytest.mark.asyncio
async def test_service_unavailable_without_numeric_retry_after() -> None:
    response = httpx.Response(503, headers={"Retry-After": "soon"}, json={})
    _, handler = _recorder(response)
    t = _transport(handler)

    with pytest.raises(NordnetError) as exc_info:
        await t.get("/")

    err = exc_info.value
    assert err.kind is ErrorKind.SERVICE_UNAVAILABLE
    assert err.retry_after is None
    assert err.message == "Request failed with status 503"


@pytest.mark.asyncio
async def test_generic_api_error_keeps_code_and_body() -> None:
    body = {"message": "Conflict", "code": "ORDER_LOCKED", "details": {"order_id": 7}}
    _, handler = _recorder(httpx.Response(409, json=body))
    t = _transport(handler)

    with pytest.raises(NordnetError) as exc_info:
        await t.put("/accounts/1/orders/7", {"price": 10})

    err = exc_info.value
    assert err.kind is ErrorKind.API
    assert err.code == "ORDER_LOCKED"
    assert err.body == body
    assert err.retry_after is None


@pytest.mark.asyncio
async def test_error_text_body_used_when_not_json() -> None:
    _, handler = _recorder(httpx.Response(500, text="upstream exploded"))
    t = _transport(handler)

    with pytest.raises(NordnetError) as exc_info:
        await t.get("/accounts")

    assert exc_info.value.message == "upstream exploded"
    assert exc_info.value.kind is ErrorKind.API


@pytest.mark.asyncio
async def test_error_empty_body_uses_generic_message() -> None:
    _, handler = _recorder(httpx.Response(404))
    t = _transport(handler)

    with pytest.raises(NordnetError) as exc_info:
        await t.get("/accounts/999")

    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    assert exc_info.value.message == "Request failed with status 404"


@pytest.mark.asyncio
async def test_timeout_surfaces_as_network_error() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(10)
        return httpx.Response(200, json={})

    t = _transport(handler, timeout_ms=5)

    with pytest.raises(NordnetError) as exc_info:
        await t.get("/accounts")

    err = exc_info.value
    assert err.kind is ErrorKind.NETWORK
    assert err.message == "Request timeout"
    assert err.status_code is None


@pytest.mark.asyncio
async def test_per_call_timeout_overrides_default() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(10)
        return httpx.Response(200, json={})

    t = _transport(handler, timeout_ms=60000)

    with pytest.raises(NordnetError) as exc_info:
        await t.get("/accounts", RequestOptions(timeout_ms=5))

    assert exc_info.value.message == "Request timeout"


@pytest.mark.asyncio
async def test_transport_failure_wraps_cause() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    t = _transport(handler)

    with pytest.raises(NordnetError) as exc_info:
        await t.get("/accounts")

    err = exc_info.value
    assert err.kind is ErrorKind.NETWORK
    assert err.message == "Connection refused"
    assert isinstance(err.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_malformed_success_body_is_decode_error() -> None:
    _, handler = _recorder(httpx.Response(200, content=b"{not json"))
    t = _transport(handler)

    with pytest.raises(NordnetError) as exc_info:
        await t.get("/accounts")

    assert exc_info.value.kind is ErrorKind.DECODE
    assert exc_info.value.status_code == 200


@pytest.mark.asyncio
async def test_debug_trace_only_when_enabled(caplog) -> None:
    _, handler = _recorder(httpx.Response(400, json={"message": "bad volume"}))
    caplog.set_level(logging.DEBUG, logger="nordnet_client.transport")

    quiet = _transport(handler)
    with pytest.raises(NordnetError):
        await quiet.post("/accounts/1/orders", {"volume": -1})
    assert not [r for r in caplog.records if r.name == "nordnet_client.transport"]

    loud = _transport(handler, debug=True)
    with pytest.raises(NordnetError) as exc_info:
        await loud.post("/accounts/1/orders", {"volume": -1})

    messages = [r.getMessage() for r in caplog.records if r.name == "nordnet_client.transport"]
    assert "POST https://api.test.com/accounts/1/orders" in messages
    assert "Response status: 400" in messages
    assert "Error 400: bad volume" in messages
    assert exc_info.value.kind is ErrorKind.BAD_REQUEST
