"""Covered-call price list aggregation."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ..constants import THROTTLE_DELAY_SECONDS
from ..domain import PriceResult, RoundPrice, TokenMeta, Universe
from ..errors import PriceResolutionError, UnmatchedDerivativeError
from ..logger import get_logger

logger = get_logger(__name__)

UniverseLoader = Callable[[], Awaitable[Universe]]
PriceResolver = Callable[[str], Awaitable[RoundPrice]]
Sleeper = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class Priced:
    """A token that resolved and matched an LP token."""

    result: PriceResult


@dataclass(frozen=True)
class Skipped:
    """A token that yields no result, with the reason why."""

    token: TokenMeta
    error: PriceResolutionError | UnmatchedDerivativeError


ItemOutcome = Priced | Skipped


async def price_token(
    token: TokenMeta, universe: Universe, resolve: PriceResolver
) -> ItemOutcome:
    """Resolve one underlying token into a price list entry.

    Only per-item errors are turned into ``Skipped``; anything else
    propagates.
    """
    try:
        round_price = await resolve(token.address)
    except PriceResolutionError as exc:
        return Skipped(token=token, error=exc)

    lp_token = universe.find_derivative(round_price.lp_mint)
    if lp_token is None:
        return Skipped(
            token=token,
            error=UnmatchedDerivativeError(token.address, round_price.lp_mint),
        )

    return Priced(
        result=PriceResult(
            symbol=lp_token.symbol,
            address=lp_token.address,
            price=round_price.price,
            mint=token.address,
            coingecko=token.coingecko_id,
        )
    )


async def build_price_list(
    load_universe: UniverseLoader,
    resolve: PriceResolver,
    *,
    throttle: bool = False,
    delay: float = THROTTLE_DELAY_SECONDS,
    sleep: Sleeper = asyncio.sleep,
) -> list[PriceResult]:
    """Build the covered-call price list over the token universe.

    Tokens are processed one at a time in registry order. A token whose
    price cannot be resolved, or whose LP mint is not in the registry, is
    logged and left out.

    Args:
        load_universe: Coroutine returning the token universe
        resolve: Coroutine resolving an underlying mint to its round price
        throttle: Pause ``delay`` seconds between tokens
        delay: Pause length in seconds
        sleep: Awaitable used for pauses

    Returns:
        Price list entries in registry order

    Raises:
        RegistryError: If the token universe cannot be loaded
    """
    universe = await load_universe()

    price_list: list[PriceResult] = []
    processed = 0
    for token in universe.underlying:
        if any(entry.mint == token.address for entry in price_list):
            logger.debug("Skipping repeated mint %s (%s)", token.address, token.symbol)
            continue

        if throttle and processed:
            await sleep(delay)
        processed += 1

        logger.info("Getting info for %s: %s", token.symbol, token.address)
        outcome = await price_token(token, universe, resolve)

        if isinstance(outcome, Priced):
            price_list.append(outcome.result)
        elif isinstance(outcome.error, UnmatchedDerivativeError):
            logger.warning(
                "LP token didn't match for %s: %s", token.symbol, outcome.error
            )
        else:
            logger.error(
                "Failed to resolve price for %s (%s): %s",
                token.symbol,
                token.address,
                outcome.error,
            )

    logger.info(
        "Resolved %d of %d covered-call prices", len(price_list), processed
    )
    return price_list
