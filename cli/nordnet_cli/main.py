from __future__ import annotations

import typer

from . import console
from .commands import accounts_cmd, auth_cmd, instruments_cmd, orders_cmd, settings_cmd
from .config import load_config
from .formatting import format_timestamp_ms
from .http import run_with_client
from .logging_ import setup_logging


def status(
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    """Show API system status."""
    cfg = load_config()
    data = run_with_client(cfg, lambda c: c.system.get_status(), action="Status check failed",
                           base_url_override=base_url)
    if json_out:
        console.print_json(data)
        return
    if not isinstance(data, dict):
        console.warn("Status endpoint returned no data.")
        return
    if data.get("system_open"):
        console.ok("System open.")
    else:
        console.warn("System closed.")
    console.info(f"Server time: {format_timestamp_ms(data.get('timestamp'))}")
    if data.get("valid_version") is False:
        console.warn("Server reports this API version as no longer valid.")


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="nordnet",
        help="nordnet CLI",
        no_args_is_help=True,
    )

    app.add_typer(auth_cmd.app, name="auth")
    app.add_typer(accounts_cmd.app, name="accounts")
    app.add_typer(orders_cmd.app, name="orders")
    app.add_typer(instruments_cmd.app, name="instruments")
    app.add_typer(settings_cmd.app, name="settings")
    app.command("status")(status)

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs, including HTTP traces."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()


if __name__ == "__main__":
    app()
