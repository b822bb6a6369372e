from __future__ import annotations

from typing import Any

from .config_types import RequestOptions
from .paths import flag_params
from .transport import Transport


class NewsResource:
    def __init__(self, transport: Transport):
        self._t = transport

    async def list(self, *, instrument_id: int | None = None, limit: int | None = None) -> list[dict[str, Any]]:
        params = flag_params(instrument_id=instrument_id, limit=limit)
        return await self._t.get("/news", RequestOptions(params=params))

    async def get(self, item_id: int) -> dict[str, Any]:
        return await self._t.get(f"/news/{item_id}")

    async def get_sources(self) -> list[dict[str, Any]]:
        return await self._t.get("/news_sources")
