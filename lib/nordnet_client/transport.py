from __future__ import annotations

import asyncio
import base64
import json
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import httpx

from .config_types import (
    DEFAULT_BASE_URL,
    DEFAULT_LANGUAGE,
    DEFAULT_TIMEOUT_MS,
    ClientConfig,
    RequestOptions,
    validate_config,
)
from .errors import ErrorKind, NordnetError, error_for_status
from .errors_utils import parse_error_envelope, parse_retry_after

logger = logging.getLogger(__name__)

USER_AGENT = "nordnet-client/0.1.0"


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


# Marks "no body" so that an explicit None / {} is still serialized.
MISSING: Any = _Missing()


def basic_credentials(session_id: str) -> str:
    raw = f"{session_id}:{session_id}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def _param_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Mapping):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def build_query(params: Mapping[str, object] | None) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    if not params:
        return pairs
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            for item in value:
                pairs.append((key, _param_value(item)))
        else:
            pairs.append((key, _param_value(value)))
    return pairs


def build_url(base_url: str, path: str, params: Mapping[str, object] | None = None) -> str:
    url = f"{base_url}{path}"
    pairs = build_query(params)
    if not pairs:
        return url
    sep = "&" if "?" in url else "?"
    return f"{url}{sep}{urlencode(pairs)}"


class Transport:
    """Executes one HTTP exchange per call and owns the session credential.

    ``transport`` is any ``httpx.AsyncBaseTransport``; when omitted httpx
    uses its default network transport. An injected transport belongs to the
    caller and is left open by ``aclose``.
    """

    def __init__(self, cfg: ClientConfig, *, transport: httpx.AsyncBaseTransport | None = None):
        validate_config(cfg)
        self._cfg = cfg
        self._base_url = cfg.base_url or DEFAULT_BASE_URL
        self._timeout_ms = cfg.timeout_ms or DEFAULT_TIMEOUT_MS
        self._language = cfg.language or DEFAULT_LANGUAGE
        self._debug = bool(cfg.debug)
        self._session_id = cfg.session_id or None
        self._default_headers = httpx.Headers({
            "User-Agent": USER_AGENT,
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Accept-Language": self._language,
        })
        self._default_headers.update(cfg.headers or {})

        self._owns_transport = transport is None
        # Timeouts are enforced per request in request(), not by httpx.
        self._client = httpx.AsyncClient(
            timeout=None,
            follow_redirects=True,
            transport=transport,
        )

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout_ms(self) -> float:
        return self._timeout_ms

    async def aclose(self) -> None:
        if self._owns_transport:
            await self._client.aclose()

    def set_session_id(self, session_id: str) -> None:
        self._session_id = session_id

    def get_session_id(self) -> str | None:
        return self._session_id

    def clear_session(self) -> None:
        self._session_id = None

    async def get(self, path: str, options: RequestOptions | None = None) -> Any:
        return await self.request("GET", path, options=options)

    async def post(self, path: str, body: Any = MISSING, options: RequestOptions | None = None) -> Any:
        return await self.request("POST", path, body=body, options=options)

    async def put(self, path: str, body: Any = MISSING, options: RequestOptions | None = None) -> Any:
        return await self.request("PUT", path, body=body, options=options)

    async def delete(self, path: str, options: RequestOptions | None = None) -> Any:
        return await self.request("DELETE", path, options=options)

    def build_headers(self, overrides: Mapping[str, str] | None = None) -> httpx.Headers:
        # Header names compare case-insensitively; the session credential is set last.
        headers = httpx.Headers(self._default_headers)
        headers.update(overrides or {})
        session_id = self._session_id
        if session_id:
            headers["Authorization"] = basic_credentials(session_id)
        return headers

    async def request(
            self,
            method: str,
            path: str,
            *,
            body: Any = MISSING,
            options: RequestOptions | None = None,
    ) -> Any:
        options = options or RequestOptions()
        url = build_url(self._base_url, path, options.params)
        headers = self.build_headers(options.headers)
        content = None
        if body is not MISSING:
            content = json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        timeout_ms = options.timeout_ms or self._timeout_ms

        if self._debug:
            logger.debug("%s %s", method, url)
            if body is not MISSING:
                logger.debug("Request body: %r", body)

        req = self._client.build_request(method, url, headers=headers, content=content)
        try:
            r = await asyncio.wait_for(self._client.send(req), timeout=timeout_ms / 1000)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise NordnetError.network("Request timeout") from e
        except httpx.RequestError as e:
            raise NordnetError.network(str(e) or type(e).__name__) from e

        return self._handle_response(r)

    def _handle_response(self, r: httpx.Response) -> Any:
        if self._debug:
            logger.debug("Response status: %s", r.status_code)

        if r.is_success:
            if r.status_code == 204:
                return None
            try:
                data = r.json()
            except ValueError as e:
                raise NordnetError(
                    ErrorKind.DECODE,
                    f"Response body is not valid JSON (status {r.status_code})",
                    status_code=r.status_code,
                    body=r.text,
                ) from e
            if self._debug:
                logger.debug("Response data: %r", data)
            return data

        envelope = parse_error_envelope(r.status_code, r.content, r.encoding)
        if self._debug:
            logger.debug("Error %s: %s", r.status_code, envelope.message)

        raise error_for_status(
            r.status_code,
            envelope.message,
            code=envelope.code,
            body=envelope.body,
            retry_after=parse_retry_after(r.headers.get("Retry-After")),
        )
