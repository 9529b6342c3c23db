"""Program-derived addresses for structured product accounts."""

from __future__ import annotations

from solders.pubkey import Pubkey

from ..constants import PAGE_INDEX_SEED_BYTES, PRICE_PER_SHARE_SEED, STATE_SEED
from ..errors import DerivationError


def parse_mint(value: str | Pubkey) -> Pubkey:
    """Parse a base58 mint address.

    Raises:
        DerivationError: If ``value`` is not a valid public key.
    """
    if isinstance(value, Pubkey):
        return value
    try:
        return Pubkey.from_string(value)
    except (ValueError, TypeError) as exc:
        raise DerivationError(
            f"Malformed mint address {value!r}: {exc}", mint=str(value)
        ) from exc


def derive_state_address(mint: str | Pubkey, program_id: Pubkey) -> Pubkey:
    """Derive the address of the state account for an underlying mint."""
    mint_key = parse_mint(mint)
    address, _bump = Pubkey.find_program_address(
        [STATE_SEED, bytes(mint_key)], program_id
    )
    return address


def derive_price_history_address(
    mint: str | Pubkey, page_index: int, program_id: Pubkey
) -> Pubkey:
    """Derive the address of the price-per-share page ``page_index``.

    Raises:
        DerivationError: If the mint is malformed or the page index does not
            fit the seed width.
    """
    mint_key = parse_mint(mint)
    try:
        page_seed = page_index.to_bytes(
            PAGE_INDEX_SEED_BYTES, "little", signed=False
        )
    except OverflowError as exc:
        raise DerivationError(
            f"Page index {page_index} out of range for {PAGE_INDEX_SEED_BYTES}-byte seed",
            mint=str(mint_key),
        ) from exc

    address, _bump = Pubkey.find_program_address(
        [PRICE_PER_SHARE_SEED, bytes(mint_key), page_seed], program_id
    )
    return address
