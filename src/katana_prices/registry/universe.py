"""Token universe: underlying tokens and their covered-call LP tokens."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from ..domain import DerivativeTokenMeta, TokenMeta, Universe
from ..logger import get_logger
from .client import BaseTokenRegistry

logger = get_logger(__name__)

T = TypeVar("T")


def _unique(items: Iterable[T]) -> list[T]:
    """Drop repeated values, keeping first-seen order."""
    return list(dict.fromkeys(items))


async def load_universe(
    registry: BaseTokenRegistry,
    underlying_mints: Iterable[str],
    lp_tag: str,
    lp_symbol_prefix: str,
) -> Universe:
    """Resolve the underlying and LP token sets from the registry.

    Both sets are deduplicated by full value, so two registry entries for the
    same mint with different metadata are both kept.

    Raises:
        RegistryError: If the registry cannot be resolved.
    """
    tokens = await registry.resolve_token_list()
    wanted = set(underlying_mints)

    underlying = _unique(
        TokenMeta(
            symbol=token.symbol,
            address=token.address,
            coingecko_id=token.coingecko_id,
        )
        for token in tokens
        if token.address in wanted
    )
    derivatives = _unique(
        DerivativeTokenMeta(symbol=token.symbol, address=token.address)
        for token in tokens
        if token.has_tag(lp_tag) and token.symbol.startswith(lp_symbol_prefix)
    )

    logger.info(
        "Token universe: %d underlying tokens, %d LP tokens",
        len(underlying),
        len(derivatives),
    )
    return Universe(underlying=underlying, derivatives=derivatives)
