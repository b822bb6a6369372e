from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .config_types import RequestOptions
from .paths import flag_params, join_ids
from .transport import Transport
from .types import Account

AccountIds = int | Iterable[int]


class AccountsResource:
    def __init__(self, transport: Transport):
        self._t = transport

    async def list(self, *, include_credit_accounts: bool | None = None) -> list[Account]:
        params = flag_params(include_credit_accounts=include_credit_accounts)
        return await self._t.get("/accounts", RequestOptions(params=params))

    async def get_info(
            self,
            account_ids: AccountIds,
            *,
            include_interest_rate: bool | None = None,
            include_short_pos_margin: bool | None = None,
    ) -> list[dict[str, Any]]:
        params = flag_params(
            include_interest_rate=include_interest_rate,
            include_short_pos_margin=include_short_pos_margin,
        )
        return await self._t.get(f"/accounts/{join_ids(account_ids)}/info", RequestOptions(params=params))

    async def get_ledgers(self, account_id: int) -> dict[str, Any]:
        return await self._t.get(f"/accounts/{account_id}/ledgers")

    async def get_positions(
            self,
            account_ids: AccountIds,
            *,
            include_instrument_loans: bool | None = None,
            include_intraday_limit: bool | None = None,
    ) -> list[dict[str, Any]]:
        params = flag_params(
            include_instrument_loans=include_instrument_loans,
            include_intraday_limit=include_intraday_limit,
        )
        return await self._t.get(f"/accounts/{join_ids(account_ids)}/positions", RequestOptions(params=params))

    async def get_trades(self, account_ids: AccountIds, *, days: int | None = None) -> list[dict[str, Any]]:
        """Trades for one or more accounts, ``days`` back (0-7, 0 is today only)."""
        params = flag_params(days=days)
        return await self._t.get(f"/accounts/{join_ids(account_ids)}/trades", RequestOptions(params=params))

    async def get_transactions_today(
            self,
            account_id: int,
            *,
            include_credit_account: bool | None = None,
    ) -> list[dict[str, Any]]:
        params = flag_params(include_credit_account=include_credit_account)
        return await self._t.get(
            f"/accounts/{account_id}/returns/transactions/today",
            RequestOptions(params=params),
        )
