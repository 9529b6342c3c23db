"""Covered-call token prices for Katana structured products on Solana."""

from __future__ import annotations

from .domain import DerivativeTokenMeta, PriceResult, RoundPrice, TokenMeta, Universe
from .errors import (
    AccountNotFound,
    DerivationError,
    FetchError,
    IndexOutOfRange,
    KatanaPricesError,
    PriceResolutionError,
    RegistryError,
    UnmatchedDerivativeError,
)
from .service import PriceService
from .settings import PriceServiceSettings

__all__ = [
    "AccountNotFound",
    "DerivationError",
    "DerivativeTokenMeta",
    "FetchError",
    "IndexOutOfRange",
    "KatanaPricesError",
    "PriceResolutionError",
    "PriceResult",
    "PriceService",
    "PriceServiceSettings",
    "RegistryError",
    "RoundPrice",
    "TokenMeta",
    "UnmatchedDerivativeError",
    "Universe",
]
