"""Rich console and JSON formatting for price output."""

from __future__ import annotations

import json

from rich.console import Console
from rich.table import Table

from ..domain import PriceResult, RoundPrice


def _truncate_address(address: str) -> str:
    """Truncate address for display."""
    return f"{address[:6]}...{address[-4:]}"


def _format_price(price: float) -> str:
    return f"{price:.6f}"


def format_price_list_json(prices: list[PriceResult]) -> str:
    return json.dumps([p.to_dict() for p in prices], indent=2)


def format_round_price_json(round_price: RoundPrice) -> str:
    return json.dumps(round_price.to_dict(), indent=2)


def print_price_list_table(
    prices: list[PriceResult], console: Console | None = None
) -> None:
    """Print the covered-call price list as a table.

    Args:
        prices: Price list entries, in the order they should be shown
        console: Console to print to (defaults to stdout)
    """
    console = console or Console()

    table = Table(title="Covered-call prices", title_style="bold")
    table.add_column("Symbol", style="cyan")
    table.add_column("LP mint", style="dim")
    table.add_column("Underlying", style="dim")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Coingecko", style="magenta")

    for p in prices:
        table.add_row(
            p.symbol,
            _truncate_address(p.address),
            _truncate_address(p.mint),
            _format_price(p.price),
            p.coingecko or "-",
        )

    console.print(table)
    console.print(f"[dim]{len(prices)} token(s)[/]")


def print_round_price_table(
    round_price: RoundPrice, console: Console | None = None
) -> None:
    console = console or Console()

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Key", style="dim")
    table.add_column("Value", style="cyan")
    table.add_row("Underlying", round_price.mint)
    table.add_row("LP mint", round_price.lp_mint)
    table.add_row("Round", str(round_price.round))
    table.add_row("Price", f"[green]{_format_price(round_price.price)}[/]")

    console.print(table)
