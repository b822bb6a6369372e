from __future__ import annotations

import json

import httpx
import pytest
from nordnet_client import NordnetClient

from nordnet_cli import config, http


class FakeApi:
    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, object]] = {}
        self.requests: list[httpx.Request] = []

    def route(self, method: str, path: str, status: int, body: object) -> None:
        self.routes[(method, path)] = (status, body)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path.removeprefix("/api/2"))
        status, body = self.routes.get(key, (404, {"message": f"no route {key}"}))
        return httpx.Response(status, json=body)

    def body(self, index: int) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(config, "user_config_dir", _config_dir)
    monkeypatch.delenv(config.ENV_BASE_URL, raising=False)
    return tmp_path


@pytest.fixture
def fake_api(monkeypatch, config_dir) -> FakeApi:
    api = FakeApi()

    class _Client(NordnetClient):
        def __init__(self, cfg=None, *, transport=None):
            super().__init__(cfg, transport=httpx.MockTransport(api))

    monkeypatch.setattr(http, "NordnetClient", _Client)
    return api
