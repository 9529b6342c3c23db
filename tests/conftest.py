from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
from solders.pubkey import Pubkey

from katana_prices.chain.accounts import BaseAccountFetcher
from katana_prices.chain.addresses import (
    derive_price_history_address,
    derive_state_address,
)
from katana_prices.errors import AccountNotFound, FetchError
from katana_prices.registry.client import BaseTokenRegistry
from katana_prices.registry.models import RegistryToken

PROGRAM_ID = Pubkey.from_string("11111111111111111111111111111111")


class FakeAccountFetcher(BaseAccountFetcher):
    """Serves decoded accounts from memory, keyed by address."""

    def __init__(self) -> None:
        self.accounts: dict[Pubkey, tuple[str, Any]] = {}
        self.failures: dict[Pubkey, Exception] = {}
        self.fetched: list[tuple[Pubkey, str]] = []
        self.closed = False

    def add_product(
        self,
        mint: str,
        *,
        round_: int,
        decimals: int,
        lp_mint: str,
        prices: list[int],
        rounds_per_page: int,
        quote_mint: str = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
    ) -> None:
        state_address = derive_state_address(mint, PROGRAM_ID)
        self.accounts[state_address] = (
            "State",
            SimpleNamespace(
                round=round_,
                decimals=decimals,
                underlying_token_mint=Pubkey.from_string(mint),
                derivative_token_mint=Pubkey.from_string(lp_mint),
                quote_token_mint=Pubkey.from_string(quote_mint),
            ),
        )
        page_index = round_ // rounds_per_page
        if round_ % rounds_per_page == 0:
            page_index -= 1
        page_address = derive_price_history_address(mint, page_index, PROGRAM_ID)
        self.accounts[page_address] = ("PricePerSharePage", SimpleNamespace(prices=prices))

    def fail_state(self, mint: str, error: Exception) -> None:
        self.failures[derive_state_address(mint, PROGRAM_ID)] = error

    async def fetch_account(self, address: Pubkey, account_type: str) -> Any:
        self.fetched.append((address, account_type))
        if address in self.failures:
            raise self.failures[address]
        if address not in self.accounts:
            raise AccountNotFound(str(address), account_type)
        stored_type, data = self.accounts[address]
        if stored_type != account_type:
            raise FetchError(f"Account {address} is not a {account_type} account")
        return data

    async def close(self) -> None:
        self.closed = True


class FakeTokenRegistry(BaseTokenRegistry):
    def __init__(self, tokens: list[dict[str, Any]] | Exception):
        self.tokens = tokens
        self.calls = 0

    async def resolve_token_list(self) -> list[RegistryToken]:
        self.calls += 1
        if isinstance(self.tokens, Exception):
            raise self.tokens
        return [RegistryToken.model_validate(t) for t in self.tokens]


@pytest.fixture
def program_id() -> Pubkey:
    return PROGRAM_ID


@pytest.fixture
def fetcher() -> FakeAccountFetcher:
    return FakeAccountFetcher()


@pytest.fixture
def make_registry():
    return FakeTokenRegistry
