from __future__ import annotations

from .accounts import AnchorAccountFetcher, BaseAccountFetcher, ReadonlyWallet
from .addresses import (
    derive_price_history_address,
    derive_state_address,
    parse_mint,
)

__all__ = [
    "AnchorAccountFetcher",
    "BaseAccountFetcher",
    "ReadonlyWallet",
    "derive_price_history_address",
    "derive_state_address",
    "parse_mint",
]
