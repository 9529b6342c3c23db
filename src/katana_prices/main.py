"""CLI entrypoint for katana-prices."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from .domain import PriceResult, RoundPrice
from .errors import PriceResolutionError, RegistryError
from .logger import setup_logging
from .report import (
    format_price_list_json,
    format_round_price_json,
    print_price_list_table,
    print_round_price_table,
)
from .service import PriceService
from .settings import PriceServiceSettings

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    add_help_option=True,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
    help="Covered-call token prices for Katana structured products.",
)

logger = logging.getLogger("katana_prices")


def _build_service(settings: PriceServiceSettings) -> PriceService:
    try:
        return PriceService(settings)
    except ValueError as exc:
        raise typer.BadParameter(
            str(exc),
            param_hint=["--program-id", "KATANA_PRICES_STRUCTURED_PROGRAM_ID"],
        ) from exc


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a TOML config file (can include [katana_prices] table).",
        ),
    ] = None,
    rpc_url: Annotated[
        str | None,
        typer.Option("--rpc-url", help="Solana RPC endpoint; defaults to mainnet-beta."),
    ] = None,
    wallet_address: Annotated[
        str | None,
        typer.Option(
            "--wallet",
            help="Read-only wallet identity; an ephemeral key is used when omitted.",
        ),
    ] = None,
    program_id: Annotated[
        str | None,
        typer.Option("--program-id", help="Structured product program id."),
    ] = None,
    idl_path: Annotated[
        Path | None,
        typer.Option(
            "--idl",
            help="Structured product IDL JSON; fetched on-chain when omitted.",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Override logging verbosity (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
        ),
    ] = None,
    show_config: Annotated[
        bool,
        typer.Option(
            "--show-config",
            help="Print effective config and exit.",
        ),
    ] = False,
):
    """Load configuration shared by every command."""
    if config_path:
        os.environ["KATANA_PRICES_CONFIG"] = str(config_path)

    init_kwargs: dict[str, str | Path] = {}
    if rpc_url is not None:
        init_kwargs["rpc_url"] = rpc_url
    if wallet_address is not None:
        init_kwargs["wallet_address"] = wallet_address
    if program_id is not None:
        init_kwargs["structured_program_id"] = program_id
    if idl_path is not None:
        init_kwargs["idl_path"] = idl_path
    if log_level is not None:
        init_kwargs["log_level"] = log_level

    try:
        settings = PriceServiceSettings(**init_kwargs)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    setup_logging(settings.log_level)

    if show_config:
        typer.echo(json.dumps(settings.as_safe_dict(), indent=2))
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)

    ctx.obj = settings


async def _fetch_price(settings: PriceServiceSettings, mint: str) -> RoundPrice:
    async with _build_service(settings) as service:
        return await service.get_price_by_underlying_mint(mint)


async def _fetch_price_list(
    settings: PriceServiceSettings, with_delay: bool, timeout_s: float | None
) -> list[PriceResult]:
    async with _build_service(settings) as service:
        if timeout_s is None or timeout_s <= 0:
            return await service.get_covered_call_price_list(with_delay)
        async with asyncio.timeout(timeout_s):
            return await service.get_covered_call_price_list(with_delay)


@app.command("price")
def price(
    ctx: typer.Context,
    mint: Annotated[str, typer.Argument(help="Underlying token mint address.")],
    as_json: Annotated[
        bool, typer.Option("--json", help="Print JSON instead of a table.")
    ] = False,
):
    """Resolve the current covered-call price for one underlying mint."""
    settings: PriceServiceSettings = ctx.obj

    try:
        round_price = asyncio.run(_fetch_price(settings, mint))
    except PriceResolutionError as exc:
        logger.error("Price lookup failed: %s", exc)
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(format_round_price_json(round_price))
    else:
        print_round_price_table(round_price)


@app.command("list")
def price_list(
    ctx: typer.Context,
    with_delay: Annotated[
        bool,
        typer.Option(
            "--with-delay/--no-delay",
            help="Pause between tokens to go easy on the RPC provider.",
        ),
    ] = False,
    timeout_s: Annotated[
        float | None,
        typer.Option(
            "--timeout",
            help="Give up on the whole list after this many seconds.",
        ),
    ] = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print JSON instead of a table.")
    ] = False,
):
    """Resolve prices for every covered-call token in the registry."""
    settings: PriceServiceSettings = ctx.obj

    try:
        prices = asyncio.run(_fetch_price_list(settings, with_delay, timeout_s))
    except RegistryError as exc:
        logger.error("Token registry unavailable: %s", exc)
        raise typer.Exit(code=1) from exc
    except TimeoutError as exc:
        logger.error("Price list exceeded timeout of %ss", timeout_s)
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(format_price_list_json(prices))
    else:
        print_price_list_table(prices)


def run() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    run()
