from __future__ import annotations

import typer

from .. import console
from ..config import load_config
from ..formatting import format_timestamp_ms, format_value, tradable_label
from ..http import run_with_client

app = typer.Typer(help="Accounts, positions and trades.")


def _ids(raw: str) -> list[int]:
    try:
        ids = [int(part) for part in raw.split(",") if part.strip()]
    except ValueError:
        console.err(f"Invalid account id list: {raw}")
        raise typer.Exit(code=2)
    if not ids:
        console.err("At least one account id is required.")
        raise typer.Exit(code=2)
    return ids


@app.command("list")
def list_accounts(
        include_credit: bool = typer.Option(False, "--include-credit", help="Include credit accounts."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    data = run_with_client(
        cfg,
        lambda c: c.accounts.list(include_credit_accounts=True if include_credit else None),
        action="Failed to list accounts",
    )
    if json_out:
        console.print_json(data)
        return

    table = console.table("Accounts", "accid", "accno", "type", "alias", "default", "blocked")
    for a in data or []:
        table.add_row(
            str(a.get("accid", "-")),
            str(a.get("accno", "-")),
            str(a.get("type", "-")),
            str(a.get("alias") or "-"),
            "yes" if a.get("is_default") else "no",
            "yes" if a.get("is_blocked") else "no",
        )
    console.print(table)


@app.command("info")
def account_info(
        account_ids: str = typer.Argument(..., help="Account id or comma-separated ids."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    ids = _ids(account_ids)
    cfg = load_config()
    data = run_with_client(cfg, lambda c: c.accounts.get_info(ids), action="Failed to get account info")
    if json_out:
        console.print_json(data)
        return

    table = console.table("Account info", "accid", "currency", "own capital", "trading power", "account sum")
    for a in data or []:
        table.add_row(
            str(a.get("accid", "-")),
            str(a.get("account_currency") or "-"),
            format_value(a.get("own_capital")),
            format_value(a.get("trading_power")),
            format_value(a.get("account_sum")),
        )
    console.print(table)


@app.command("positions")
def positions(
        account_ids: str = typer.Argument(..., help="Account id or comma-separated ids."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    ids = _ids(account_ids)
    cfg = load_config()
    data = run_with_client(cfg, lambda c: c.accounts.get_positions(ids), action="Failed to get positions")
    if json_out:
        console.print_json(data)
        return

    table = console.table("Positions", "accid", "tradable", "qty", "acq price", "market value")
    for p in data or []:
        table.add_row(
            str(p.get("accid", "-")),
            tradable_label(p.get("instrument")),
            format_value(p.get("qty")),
            format_value(p.get("acq_price")),
            format_value(p.get("market_value")),
        )
    console.print(table)


@app.command("trades")
def trades(
        account_ids: str = typer.Argument(..., help="Account id or comma-separated ids."),
        days: int | None = typer.Option(None, "--days", min=0, max=7, help="Days back (0 is today only)."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    ids = _ids(account_ids)
    cfg = load_config()
    data = run_with_client(cfg, lambda c: c.accounts.get_trades(ids, days=days), action="Failed to get trades")
    if json_out:
        console.print_json(data)
        return

    table = console.table("Trades", "trade_id", "time", "side", "tradable", "volume", "price")
    for t in data or []:
        table.add_row(
            str(t.get("trade_id", "-")),
            format_timestamp_ms(t.get("trade_timestamp")),
            str(t.get("side") or "-"),
            tradable_label(t.get("tradable")),
            format_value(t.get("volume")),
            f"{format_value(t.get('price'))} {t.get('currency') or ''}".strip(),
        )
    console.print(table)
