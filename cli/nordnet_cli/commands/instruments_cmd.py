from __future__ import annotations

import typer

from .. import console
from ..config import load_config
from ..http import run_with_client

app = typer.Typer(help="Instrument lookup and search.")


def _instrument_table(title: str, rows):
    table = console.table(title, "instrument_id", "symbol", "name", "isin", "type", "currency")
    for i in rows or []:
        table.add_row(
            str(i.get("instrument_id", "-")),
            str(i.get("symbol") or "-"),
            str(i.get("name") or "-"),
            str(i.get("isin_code") or i.get("isin") or "-"),
            str(i.get("instrument_type") or "-"),
            str(i.get("currency") or "-"),
        )
    return table


@app.command("get")
def get_instrument(
        instrument_id: int = typer.Argument(..., help="Instrument id."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    data = run_with_client(cfg, lambda c: c.instruments.get(instrument_id), action="Failed to get instrument")
    if json_out:
        console.print_json(data)
        return
    console.print(_instrument_table("Instrument", [data] if isinstance(data, dict) else data))


@app.command("lookup")
def lookup(
        value: str = typer.Argument(..., help="ISIN code or symbol."),
        by: str = typer.Option("isin", "--by", help="Lookup type: isin or symbol."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    lookup_type = by.strip().lower()
    if lookup_type not in {"isin", "symbol"}:
        console.err("--by must be isin or symbol.")
        raise typer.Exit(code=2)
    cfg = load_config()
    data = run_with_client(
        cfg,
        lambda c: c.instruments.lookup(lookup_type, value),  # type: ignore[arg-type]
        action="Instrument lookup failed",
    )
    if json_out:
        console.print_json(data)
        return
    console.print(_instrument_table(f"Lookup {lookup_type}={value}", data))


@app.command("search")
def search(
        query: str = typer.Argument(..., help="Free text search."),
        entity_type: str | None = typer.Option(None, "--type", help="Entity type filter, e.g. STOCK."),
        limit: int | None = typer.Option(None, "--limit", min=1, help="Maximum number of hits."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    data = run_with_client(
        cfg,
        lambda c: c.search.search(query, type=entity_type, limit=limit),
        action="Search failed",
    )
    if json_out:
        console.print_json(data)
        return
    rows = data.get("results") if isinstance(data, dict) else data
    console.print(_instrument_table(f"Search: {query}", rows))
