from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

# Messages often carry text from API responses; escape keeps "[...]" literal.


def print_json(data) -> None:
    console.print_json(data=data)


def info(msg: str) -> None:
    console.print(f"[bold cyan]•[/] {escape(msg)}")


def ok(msg: str) -> None:
    console.print(f"[bold green]OK[/] {escape(msg)}")


def warn(msg: str) -> None:
    console.print(f"[bold yellow]WARN[/] {escape(msg)}")


def err(msg: str) -> None:
    console.print(f"[bold red]ERR[/] {escape(msg)}")


def table(title: str, key: str, *columns: str) -> Table:
    """Listing table: the first column is the record id, shown bold."""
    t = Table(title=escape(title))
    t.add_column(key, style="bold", no_wrap=True)
    for name in columns:
        t.add_column(name)
    return t


def print(*args, **kwargs):
    """Proxy to underlying rich Console.print()."""
    console.print(*args, **kwargs)
