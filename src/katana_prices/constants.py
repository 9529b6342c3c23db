"""Solana addresses, seeds and registry constants."""

from typing import TypedDict


class UnderlyingMints(TypedDict):
    WSOL: str
    MSOL: str
    STSOL: str
    SOBTC: str
    SOETH: str
    RAY: str
    SRM: str
    USDC: str


DEFAULT_RPC_URL = "https://api.mainnet-beta.solana.com"

TOKEN_LIST_URL = (
    "https://cdn.jsdelivr.net/gh/solana-labs/token-list@latest/"
    "src/tokens/solana.tokenlist.json"
)

# Underlying tokens with a covered-call vault
MAINNET_UNDERLYING_MINTS: UnderlyingMints = {
    "WSOL": "So11111111111111111111111111111111111111112",
    "MSOL": "mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So",
    "STSOL": "7dHbWXmci3dT8UFYWYZweBLXgycu7Y3iL6trKn1Y7ARj",
    "SOBTC": "9n4nbM75f5Ui33ZbPYXn59EwSgE8CGsHtAeTH5YFeJ9E",
    "SOETH": "2FPyTwcZLUg1MDrwsyoP4D6s1tM7hAkHYRjkNb5w6Pxk",
    "RAY": "4k3Dyjzvzp8eMZWUXbBCjEvwSkkk59S5iCNLY3QrkX6R",
    "SRM": "SRMuApVNdxXokk5GT7XD5cUUgXMBCoAz2LHeuAoKWRt",
    "USDC": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
}

# Registry conventions for the protocol's own LP tokens
KATANA_REGISTRY_TAG = "Katana"
COVERED_CALL_SYMBOL_PREFIX = "kc"

# Program-derived address seeds
STATE_SEED = b"state"
PRICE_PER_SHARE_SEED = b"price_per_share"
PAGE_INDEX_SEED_BYTES = 4  # u32, little endian

# Anchor account names in the structured product IDL
STATE_ACCOUNT = "State"
PRICE_PER_SHARE_PAGE_ACCOUNT = "PricePerSharePage"

DEFAULT_ROUNDS_PER_PAGE = 128

THROTTLE_DELAY_SECONDS = 0.3
REGISTRY_TIMEOUT_SECONDS = 15.0
