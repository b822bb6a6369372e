from __future__ import annotations

from typing import Any

from .transport import Transport
from .types import Status


class SystemResource:
    def __init__(self, transport: Transport):
        self._t = transport

    async def get_status(self) -> Status:
        return await self._t.get("/")

    async def get_tick_sizes(self) -> list[dict[str, Any]]:
        return await self._t.get("/tick_sizes")

    async def get_tick_size(self, tick_size_id: int) -> dict[str, Any]:
        return await self._t.get(f"/tick_sizes/{tick_size_id}")
