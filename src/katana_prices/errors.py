"""Error taxonomy for price resolution and aggregation."""

from __future__ import annotations


class KatanaPricesError(Exception):
    """Base class for every error raised by katana-prices."""


class RegistryError(KatanaPricesError):
    """Raised when the token registry cannot be fetched or parsed.

    Fatal for the price list: the token universe cannot be built without it.
    """


class PriceResolutionError(KatanaPricesError):
    """Raised when the price of a single underlying mint cannot be resolved.

    The price list treats these as "this token yields no result".
    """

    def __init__(self, message: str, *, mint: str | None = None):
        super().__init__(message)
        self.mint = mint


class DerivationError(PriceResolutionError):
    """Raised when an address cannot be derived from malformed input."""


class AccountNotFound(PriceResolutionError):
    """Raised when an on-chain account does not exist or holds no data."""

    def __init__(self, address: str, account_type: str, *, mint: str | None = None):
        super().__init__(
            f"{account_type} account {address} does not exist or has no data",
            mint=mint,
        )
        self.address = address
        self.account_type = account_type


class FetchError(PriceResolutionError):
    """Raised on RPC transport failures or undecodable account data."""


class IndexOutOfRange(PriceResolutionError):
    """Raised when the current round has no settled price in its page."""


class UnmatchedDerivativeError(KatanaPricesError):
    """Raised when a state record's derivative mint is not in the registry."""

    def __init__(self, mint: str, lp_mint: str):
        super().__init__(
            f"No derivative token in registry for LP mint {lp_mint} (underlying {mint})"
        )
        self.mint = mint
        self.lp_mint = lp_mint
