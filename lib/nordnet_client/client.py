from __future__ import annotations

import dataclasses
import inspect
import logging
from collections.abc import Awaitable, Callable

import httpx

from .accounts import AccountsResource
from .auth import AuthResource
from .config_types import ClientConfig
from .errors import ErrorKind, NordnetError
from .instruments import InstrumentsResource
from .markets import CountriesResource, MarketsResource
from .news import NewsResource
from .orders import OrdersResource
from .search import SearchResource
from .system import SystemResource
from .tradables import TradablesResource
from .transport import Transport

logger = logging.getLogger(__name__)

SecondFactor = str | Callable[[], str | Awaitable[str]]


async def _resolve_second_factor(second_factor: SecondFactor) -> str:
    if not callable(second_factor):
        return str(second_factor)
    code = second_factor()
    if inspect.isawaitable(code):
        code = await code
    return str(code)


class NordnetClient:
    """Entry point: one transport shared by all resource groups.

    >>> async with NordnetClient(ClientConfig(session_id="...")) as client:
    ...     accounts = await client.accounts.list()
    """

    def __init__(self, cfg: ClientConfig | None = None, *, transport: httpx.AsyncBaseTransport | None = None):
        self._t = Transport(cfg or ClientConfig(), transport=transport)

        self.auth = AuthResource(self._t)
        self.accounts = AccountsResource(self._t)
        self.orders = OrdersResource(self._t)
        self.instruments = InstrumentsResource(self._t)
        self.markets = MarketsResource(self._t)
        self.news = NewsResource(self._t)
        self.search = SearchResource(self._t)
        self.tradables = TradablesResource(self._t)
        self.countries = CountriesResource(self._t)
        self.system = SystemResource(self._t)

    @property
    def transport(self) -> Transport:
        return self._t

    @property
    def config(self) -> ClientConfig:
        return self._t.config

    async def aclose(self) -> None:
        await self._t.aclose()

    async def __aenter__(self) -> NordnetClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def get_session_id(self) -> str | None:
        return self._t.get_session_id()

    def set_session_id(self, session_id: str) -> None:
        self._t.set_session_id(session_id)

    def clear_session(self) -> None:
        self._t.clear_session()

    @classmethod
    async def login(
            cls,
            username: str,
            password: str,
            second_factor: SecondFactor,
            *,
            cfg: ClientConfig | None = None,
            transport: httpx.AsyncBaseTransport | None = None,
    ) -> NordnetClient:
        """Run the full start/verify handshake and return a new authenticated client.

        ``second_factor`` is called once, after the challenge arrives, and may
        be a plain function or a coroutine function; a string is used as is.
        The unauthenticated client used for the handshake is closed and never
        returned.
        """
        base_cfg = dataclasses.replace(cfg or ClientConfig(), session_id=None)
        async with cls(base_cfg, transport=transport) as tmp:
            challenge = await tmp.auth.start_login(username, password)
            challenge_key = challenge.get("session_key") if isinstance(challenge, dict) else None
            if not challenge_key:
                raise NordnetError(ErrorKind.AUTHENTICATION, "Login start returned no challenge key", body=challenge)
            logger.debug(
                "Login challenge received (method=%s, type=%s)",
                challenge.get("challenge_method"),
                challenge.get("challenge_type"),
            )
            code = await _resolve_second_factor(second_factor)
            result = await tmp.auth.verify_login(code, challenge_key, install=False)

        session_key = result.get("session_key") if isinstance(result, dict) else None
        if not session_key:
            raise NordnetError(ErrorKind.AUTHENTICATION, "Login verification returned no session key", body=result)
        return cls(dataclasses.replace(base_cfg, session_id=session_key), transport=transport)
