"""Domain models for covered-call price resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TokenMeta:
    """An underlying token as listed in the token registry."""

    symbol: str
    address: str
    coingecko_id: str | None = None


@dataclass(frozen=True)
class DerivativeTokenMeta:
    """A covered-call LP token issued by the structured product program."""

    symbol: str
    address: str


@dataclass(frozen=True)
class StateRecord:
    """Snapshot of a structured product's on-chain state account."""

    round: int
    decimals: int
    underlying_mint: str
    derivative_mint: str
    quote_mint: str


@dataclass(frozen=True)
class PriceHistoryPage:
    """One page of unscaled per-round prices."""

    prices: list[int]


@dataclass(frozen=True)
class RoundPrice:
    """Current price of an underlying mint's covered-call token."""

    price: float
    round: int
    mint: str
    lp_mint: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "price": self.price,
            "round": self.round,
            "mint": self.mint,
            "lpMint": self.lp_mint,
        }


@dataclass(frozen=True)
class PriceResult:
    """One entry of the covered-call price list."""

    symbol: str
    address: str
    price: float
    mint: str
    coingecko: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "address": self.address,
            "price": self.price,
            "mint": self.mint,
            "coingecko": self.coingecko,
        }


@dataclass(frozen=True)
class Universe:
    """Deduplicated underlying and derivative token sets, in registry order."""

    underlying: list[TokenMeta]
    derivatives: list[DerivativeTokenMeta]

    def find_derivative(self, lp_mint: str) -> DerivativeTokenMeta | None:
        return next((d for d in self.derivatives if d.address == lp_mint), None)
