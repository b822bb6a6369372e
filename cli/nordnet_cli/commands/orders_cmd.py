from __future__ import annotations

import typer

from .. import console
from ..config import load_config
from ..formatting import format_value, tradable_label
from ..http import run_with_client

app = typer.Typer(help="List, place and cancel orders.")


def _print_reply(data, *, json_out: bool, verb: str) -> None:
    if json_out:
        console.print_json(data)
        return
    replies = data if isinstance(data, list) else [data]
    for reply in replies:
        if not isinstance(reply, dict):
            continue
        result = str(reply.get("result_code") or "-")
        line = f"Order {verb}: id={reply.get('order_id')} result={result} state={reply.get('order_state') or '-'}"
        if result.upper() == "OK":
            console.ok(line)
        else:
            console.warn(line)
        if reply.get("message"):
            console.info(str(reply["message"]))


@app.command("list")
def list_orders(
        account_id: int = typer.Argument(..., help="Account id."),
        deleted: bool = typer.Option(False, "--deleted", help="Include orders deleted today."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    data = run_with_client(
        cfg,
        lambda c: c.orders.list(account_id, deleted=True if deleted else None),
        action="Failed to list orders",
    )
    if json_out:
        console.print_json(data)
        return

    table = console.table(
        f"Orders ({account_id})", "order_id", "side", "tradable", "volume", "price", "state", "action",
    )
    for o in data or []:
        table.add_row(
            str(o.get("order_id", "-")),
            str(o.get("side") or "-"),
            tradable_label(o.get("tradable")),
            format_value(o.get("volume")),
            format_value(o.get("price")),
            str(o.get("order_state") or "-"),
            str(o.get("action_state") or "-"),
        )
    console.print(table)


@app.command("create")
def create_order(
        account_id: int = typer.Argument(..., help="Account id."),
        market_id: int = typer.Option(..., "--market-id", help="Market id of the tradable."),
        identifier: str = typer.Option(..., "--identifier", help="Tradable identifier on that market."),
        side: str = typer.Option(..., "--side", help="BUY or SELL."),
        volume: int = typer.Option(..., "--volume", min=1, help="Number of units."),
        price: float | None = typer.Option(None, "--price", help="Limit price."),
        currency: str | None = typer.Option(None, "--currency", help="Price currency."),
        order_type: str | None = typer.Option(None, "--order-type", help="LIMIT, NORMAL, FAK, FOK, ..."),
        valid_until: str | None = typer.Option(None, "--valid-until", help="Last valid date, YYYY-MM-DD."),
        reference: str | None = typer.Option(None, "--reference", help="Free text reference."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    side_value = side.strip().upper()
    if side_value not in {"BUY", "SELL"}:
        console.err("--side must be BUY or SELL.")
        raise typer.Exit(code=2)

    order = {
        "market_id": market_id,
        "identifier": identifier,
        "side": side_value,
        "volume": volume,
        "price": price,
        "currency": currency.upper() if currency else None,
        "order_type": order_type.upper() if order_type else None,
        "valid_until": valid_until,
        "reference": reference,
    }
    cfg = load_config()
    data = run_with_client(cfg, lambda c: c.orders.create(account_id, order), action="Failed to create order")
    _print_reply(data, json_out=json_out, verb="placed")


@app.command("delete")
def delete_order(
        account_id: int = typer.Argument(..., help="Account id."),
        order_id: int = typer.Argument(..., help="Order id."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    data = run_with_client(cfg, lambda c: c.orders.delete(account_id, order_id), action="Failed to delete order")
    _print_reply(data, json_out=json_out, verb="deleted")
