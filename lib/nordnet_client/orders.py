from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .config_types import RequestOptions
from .paths import flag_params, join_ids
from .transport import Transport
from .types import OrderEntryRequest, OrderModifyRequest, OrderReply

ORDER_REQUIRED_FIELDS = ("market_id", "side", "volume")
ORDER_OPTIONAL_FIELDS = (
    "identifier",
    "price",
    "currency",
    "order_type",
    "valid_until",
    "open_volume",
    "activation_condition",
    "trigger_value",
    "trigger_condition",
    "target_value",
    "reference",
)
MODIFY_FIELDS = ("price", "volume", "open_volume", "currency")


def _pick(source: Mapping[str, Any], keys: Iterable[str]) -> dict[str, Any]:
    return {k: source[k] for k in keys if source.get(k) is not None}


def order_entry_body(order: OrderEntryRequest | Mapping[str, Any]) -> dict[str, Any]:
    missing = [k for k in ORDER_REQUIRED_FIELDS if order.get(k) is None]
    if missing:
        raise ValueError(f"Order is missing required fields: {', '.join(missing)}")
    body = {k: order[k] for k in ORDER_REQUIRED_FIELDS}
    body.update(_pick(order, ORDER_OPTIONAL_FIELDS))
    return body


class OrdersResource:
    def __init__(self, transport: Transport):
        self._t = transport

    async def list(self, account_ids: int | Iterable[int], *, deleted: bool | None = None) -> list[dict[str, Any]]:
        params = flag_params(deleted=deleted)
        return await self._t.get(f"/accounts/{join_ids(account_ids)}/orders", RequestOptions(params=params))

    async def create(self, account_id: int, order: OrderEntryRequest | Mapping[str, Any]) -> OrderReply:
        return await self._t.post(f"/accounts/{account_id}/orders", order_entry_body(order))

    async def modify(
            self,
            account_id: int,
            order_id: int,
            changes: OrderModifyRequest | Mapping[str, Any],
    ) -> OrderReply:
        return await self._t.put(f"/accounts/{account_id}/orders/{order_id}", _pick(changes, MODIFY_FIELDS))

    async def delete(self, account_id: int, order_id: int) -> OrderReply:
        return await self._t.delete(f"/accounts/{account_id}/orders/{order_id}")

    async def activate(self, account_id: int, order_ids: int | Iterable[int]) -> list[OrderReply]:
        return await self._t.put(f"/accounts/{account_id}/orders/{join_ids(order_ids)}/activate")
