from __future__ import annotations

from .price_extractor import extract_price, locate_round, resolve_price

__all__ = [
    "extract_price",
    "locate_round",
    "resolve_price",
]
