from __future__ import annotations

from typing import Any

from .transport import Transport
from .types import Country


class MarketsResource:
    def __init__(self, transport: Transport):
        self._t = transport

    async def list(self) -> list[dict[str, Any]]:
        return await self._t.get("/markets")

    async def get(self, market_id: int) -> dict[str, Any]:
        return await self._t.get(f"/markets/{market_id}")


class CountriesResource:
    def __init__(self, transport: Transport):
        self._t = transport

    async def list(self) -> list[Country]:
        return await self._t.get("/countries")

    async def get(self, country: str) -> Country:
        return await self._t.get(f"/countries/{country}")
