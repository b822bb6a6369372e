from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .paths import join_ids
from .transport import Transport

# "market_id:identifier", e.g. "11:101", or several of them.
Tradables = str | Iterable[str]


def tradable_id(market_id: int, identifier: str | int) -> str:
    return f"{market_id}:{identifier}"


class TradablesResource:
    def __init__(self, transport: Transport):
        self._t = transport

    async def get_info(self, tradables: Tradables) -> list[dict[str, Any]]:
        return await self._t.get(f"/tradables/info/{join_ids(tradables)}")

    async def get_trades(self, tradables: Tradables) -> list[dict[str, Any]]:
        return await self._t.get(f"/tradables/trades/{join_ids(tradables)}")

    async def validate_suitability(self, tradables: Tradables) -> list[dict[str, Any]]:
        return await self._t.get(f"/tradables/validation/suitability/{join_ids(tradables)}")
