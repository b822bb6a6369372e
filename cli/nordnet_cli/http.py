from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import typer
from nordnet_client import ClientConfig, ErrorKind, NordnetClient, NordnetError
from nordnet_client.client import SecondFactor

from . import console
from .config import AppConfig, normalize_base_url, resolve_base_url
from .logging_ import debug_enabled

T = TypeVar("T")

_USAGE_KINDS = {
    ErrorKind.CONFIGURATION,
    ErrorKind.BAD_REQUEST,
    ErrorKind.AUTHENTICATION,
    ErrorKind.AUTHORIZATION,
}


def client_config(cfg: AppConfig, *, base_url_override: str | None = None, with_session: bool = True) -> ClientConfig:
    base_url = normalize_base_url(base_url_override, warn=True) if base_url_override else resolve_base_url(cfg)
    return ClientConfig(
        base_url=base_url,
        timeout_ms=cfg.timeout_ms,
        language=cfg.language,  # type: ignore[arg-type]
        debug=debug_enabled(),
        session_id=(cfg.auth.session_id or None) if with_session else None,
    )


def make_client(cfg: AppConfig, *, base_url_override: str | None = None) -> NordnetClient:
    return NordnetClient(client_config(cfg, base_url_override=base_url_override))


async def login_client(
        cfg: AppConfig,
        *,
        username: str,
        password: str,
        second_factor: SecondFactor,
        base_url_override: str | None = None,
) -> NordnetClient:
    return await NordnetClient.login(
        username,
        password,
        second_factor,
        cfg=client_config(cfg, base_url_override=base_url_override, with_session=False),
    )


def fail(action: str, exc: NordnetError) -> typer.Exit:
    console.err(f"{action}: {exc}")
    if exc.kind is ErrorKind.AUTHENTICATION:
        console.info("Session missing or expired. Run `nordnet auth login`.")
    if exc.kind in (ErrorKind.RATE_LIMIT, ErrorKind.SERVICE_UNAVAILABLE) and exc.retry_after is not None:
        console.info(f"Retry after {exc.retry_after}s.")
    return typer.Exit(code=2 if exc.kind in _USAGE_KINDS else 1)


def run_with_client(
        cfg: AppConfig,
        call: Callable[[NordnetClient], Awaitable[T]],
        *,
        action: str,
        base_url_override: str | None = None,
) -> T:
    """Run one API call on a short-lived client and turn failures into an exit code."""

    async def _run() -> Any:
        client = make_client(cfg, base_url_override=base_url_override)
        try:
            return await call(client)
        finally:
            await client.aclose()

    try:
        return asyncio.run(_run())
    except NordnetError as e:
        raise fail(action, e) from e
