from __future__ import annotations

from typing import Any

from .config_types import RequestOptions
from .paths import flag_params
from .transport import Transport
from .types import EntityType


class SearchResource:
    def __init__(self, transport: Transport):
        self._t = transport

    async def search(
            self,
            query: str,
            *,
            type: EntityType | None = None,
            limit: int | None = None,
    ) -> dict[str, Any]:
        params = {"query": query, **flag_params(type=type, limit=limit)}
        return await self._t.get("/main_search", RequestOptions(params=params))
