"""Current round price resolution from paginated price-per-share accounts."""

from __future__ import annotations

from solders.pubkey import Pubkey

from ..chain.accounts import BaseAccountFetcher
from ..chain.addresses import (
    derive_price_history_address,
    derive_state_address,
    parse_mint,
)
from ..domain import PriceHistoryPage, RoundPrice, StateRecord
from ..errors import IndexOutOfRange
from ..logger import get_logger

logger = get_logger(__name__)


def locate_round(round_: int, rounds_per_page: int) -> tuple[int, int]:
    """Map a 1-indexed round to its ``(page_index, offset)`` slot.

    The page index is ``round // rounds_per_page`` and the offset is local to
    that page. A round that is an exact multiple of the page size is the last
    slot of the previous page.

    Raises:
        IndexOutOfRange: If no round has settled yet (``round < 1``).
    """
    if rounds_per_page <= 0:
        raise ValueError(f"rounds_per_page must be positive, got {rounds_per_page}")
    if round_ < 1:
        raise IndexOutOfRange(f"Round {round_} has no settled price")

    page_index = round_ // rounds_per_page
    offset = round_ - 1 - page_index * rounds_per_page
    if offset < 0:
        page_index -= 1
        offset += rounds_per_page
    return page_index, offset


def extract_price(state: StateRecord, page: PriceHistoryPage, offset: int) -> float:
    """Scale the unscaled page entry at ``offset`` by the state's decimals.

    Raises:
        IndexOutOfRange: If ``offset`` is past the populated part of the page.
    """
    if offset >= len(page.prices):
        raise IndexOutOfRange(
            f"Round {state.round} not in price page (offset {offset}, "
            f"{len(page.prices)} entries)",
            mint=state.underlying_mint,
        )
    return page.prices[offset] / 10**state.decimals


async def resolve_price(
    mint: str | Pubkey,
    fetcher: BaseAccountFetcher,
    program_id: Pubkey,
    rounds_per_page: int,
) -> RoundPrice:
    """Resolve the current covered-call price for an underlying mint.

    Args:
        mint: Underlying token mint address
        fetcher: Account fetcher used for the state and price page accounts
        program_id: Structured product program id
        rounds_per_page: Number of rounds stored per price page

    Returns:
        Price, round and mints for the current round

    Raises:
        DerivationError: If ``mint`` is malformed
        AccountNotFound: If no structured product exists for ``mint``
        FetchError: On RPC failure
        IndexOutOfRange: If the current round has no settled price
    """
    mint_key = parse_mint(mint)

    state_address = derive_state_address(mint_key, program_id)
    state = await fetcher.fetch_state(state_address)
    logger.debug(
        "State %s: round=%d decimals=%d lp=%s",
        state_address,
        state.round,
        state.decimals,
        state.derivative_mint,
    )

    try:
        page_index, offset = locate_round(state.round, rounds_per_page)
    except IndexOutOfRange as exc:
        exc.mint = str(mint_key)
        raise

    page_address = derive_price_history_address(mint_key, page_index, program_id)
    page = await fetcher.fetch_price_page(page_address)
    logger.debug(
        "Price page %d at %s holds %d entries", page_index, page_address, len(page.prices)
    )

    price = extract_price(state, page, offset)

    return RoundPrice(
        price=price,
        round=state.round,
        mint=state.underlying_mint,
        lp_mint=state.derivative_mint,
    )
