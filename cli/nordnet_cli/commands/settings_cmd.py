from __future__ import annotations

import typer

from .. import console
from ..config import config_path, load_config, normalize_base_url, normalize_language, save_config

app = typer.Typer(help="Manage local CLI settings (~/.config/nordnet/config.toml).")


@app.command("show")
def show_settings():
    cfg = load_config()
    session_state = "(set)" if cfg.auth.session_id.strip() else "(empty)"
    console.print(
        f"base_url={cfg.base_url} language={cfg.language} timeout_ms={cfg.timeout_ms} "
        f"username={cfg.auth.username or '-'} session={session_state}"
    )
    console.print(f"config: {config_path()}")


@app.command("set")
def set_setting(
        base_url: str | None = typer.Option(None, "--base-url", help="Set API base URL."),
        language: str | None = typer.Option(None, "--language", help="Response language (da, de, en, fi, nb, nn, no, sv)."),
        timeout_ms: int | None = typer.Option(None, "--timeout-ms", min=0, help="Request timeout in milliseconds."),
):
    cfg = load_config()
    if base_url is not None:
        cfg.base_url = normalize_base_url(base_url, warn=True)
        if not cfg.base_url:
            console.err("Base URL cannot be empty.")
            raise typer.Exit(code=2)
    if language is not None:
        try:
            cfg.language = normalize_language(language)
        except ValueError as e:
            console.err(str(e))
            raise typer.Exit(code=2)
    if timeout_ms is not None:
        cfg.timeout_ms = timeout_ms
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
