from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .config_types import RequestOptions
from .transport import Transport
from .types import DerivativeType, InstrumentLookupType

SearchParams = Mapping[str, object]


class InstrumentsResource:
    """Instrument lookups and the instrument_search list queries.

    Search parameters pass straight through as query parameters, so list
    values (``country=["SE", "NO"]``) become repeated keys and nested
    mappings such as a leverage filter are sent as one JSON value.
    """

    def __init__(self, transport: Transport):
        self._t = transport

    async def get(self, instrument_id: int) -> dict[str, Any]:
        return await self._t.get(f"/instruments/{instrument_id}")

    async def lookup(self, lookup_type: InstrumentLookupType, lookup: str) -> list[dict[str, Any]]:
        return await self._t.get(f"/instruments/lookup/{lookup_type}/{lookup}")

    async def get_types(self) -> list[dict[str, Any]]:
        return await self._t.get("/instruments/types")

    async def get_type(self, instrument_type: str) -> dict[str, Any]:
        return await self._t.get(f"/instruments/types/{instrument_type}")

    async def get_trades(self, instrument_id: int) -> dict[str, Any]:
        return await self._t.get(f"/instruments/{instrument_id}/trades")

    async def get_leverages(self, instrument_id: int) -> Any:
        return await self._t.get(f"/instruments/{instrument_id}/leverages")

    async def get_leverage_filters(self, instrument_id: int) -> Any:
        return await self._t.get(f"/instruments/{instrument_id}/leverages/filters")

    async def get_underlyings(self, derivative_type: DerivativeType, currency: str) -> list[dict[str, Any]]:
        return await self._t.get(f"/instruments/underlyings/{derivative_type}/{currency}")

    async def validate_suitability(self, instrument_id: int) -> Any:
        return await self._t.get(f"/instruments/validation/suitability/{instrument_id}")

    async def get_search_attributes(self, params: SearchParams) -> dict[str, Any]:
        return await self._t.get("/instrument_search/attributes", RequestOptions(params=params))

    async def search_stock_list(self, params: SearchParams | None = None) -> dict[str, Any]:
        return await self._t.get("/instrument_search/query/stocklist", RequestOptions(params=params))

    async def search_bull_bear_list(self, params: SearchParams | None = None) -> dict[str, Any]:
        return await self._t.get("/instrument_search/query/bullbearlist", RequestOptions(params=params))

    async def search_mini_future_list(self, params: SearchParams | None = None) -> dict[str, Any]:
        return await self._t.get("/instrument_search/query/minifuturelist", RequestOptions(params=params))

    async def search_unlimited_turbo_list(self, params: SearchParams | None = None) -> dict[str, Any]:
        return await self._t.get("/instrument_search/query/unlimitedturbolist", RequestOptions(params=params))

    async def search_option_pairs(self, params: SearchParams | None = None) -> dict[str, Any]:
        return await self._t.get("/instrument_search/query/optionlist/pairs", RequestOptions(params=params))
