from __future__ import annotations

import asyncio

import typer
from nordnet_client import NordnetError

from .. import console
from ..config import load_config, save_config
from ..http import fail, login_client, run_with_client

app = typer.Typer(help="Session commands: login, keep-alive, logout.")


def _prompt_code() -> str:
    return typer.prompt("One-time code", hide_input=False).strip()


@app.command("login")
def login(
        username: str = typer.Option(..., "--username", prompt=True, help="Nordnet username."),
        password: str = typer.Option(..., "--password", prompt=True, hide_input=True, help="Nordnet password."),
        code: str | None = typer.Option(None, "--code", help="One-time code; prompted after the challenge if omitted."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    cfg = load_config()
    second_factor = code.strip() if code else _prompt_code

    async def _login() -> str | None:
        client = await login_client(
            cfg,
            username=username,
            password=password,
            second_factor=second_factor,
            base_url_override=base_url,
        )
        try:
            return client.get_session_id()
        finally:
            await client.aclose()

    try:
        session_id = asyncio.run(_login())
    except NordnetError as e:
        raise fail("Login failed", e) from e

    cfg.auth.session_id = session_id or ""
    cfg.auth.username = username
    save_path = save_config(cfg)
    console.ok(f"Login successful. Session saved to {save_path}.")


@app.command("touch")
def touch(
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    cfg = load_config()
    data = run_with_client(cfg, lambda c: c.auth.touch_session(), action="Session refresh failed",
                           base_url_override=base_url)
    if isinstance(data, dict) and data.get("logged_in"):
        console.ok("Session refreshed.")
    else:
        console.warn("Server reports the session is not logged in.")


@app.command("logout")
def logout(
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    cfg = load_config()
    if not cfg.auth.session_id:
        console.info("No saved session.")
        return
    try:
        run_with_client(cfg, lambda c: c.auth.logout(), action="Logout request failed", base_url_override=base_url)
    finally:
        cfg.auth.session_id = ""
        save_path = save_config(cfg)
        console.ok(f"Session cleared from {save_path}.")
