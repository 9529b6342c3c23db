from __future__ import annotations

from .price_list import ItemOutcome, Priced, Skipped, build_price_list, price_token

__all__ = [
    "ItemOutcome",
    "Priced",
    "Skipped",
    "build_price_list",
    "price_token",
]
