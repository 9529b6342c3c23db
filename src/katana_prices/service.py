"""Public entrypoint for covered-call price lookups."""

from __future__ import annotations

from types import TracebackType

from .chain.accounts import AnchorAccountFetcher, BaseAccountFetcher
from .domain import PriceResult, RoundPrice, Universe
from .logger import get_logger
from .pipeline.price_list import build_price_list
from .processors.price_extractor import resolve_price
from .registry.client import BaseTokenRegistry, TokenListRegistry
from .registry.universe import load_universe
from .settings import PriceServiceSettings

logger = get_logger(__name__)


class PriceService:
    """Resolve covered-call token prices for the structured product program.

    The settings, account fetcher and registry are built once and shared by
    every call. No fetched data is kept between calls.
    """

    def __init__(
        self,
        settings: PriceServiceSettings | None = None,
        *,
        fetcher: BaseAccountFetcher | None = None,
        registry: BaseTokenRegistry | None = None,
    ):
        self.settings = settings or PriceServiceSettings()
        self.program_id = self.settings.program_id
        self.fetcher = fetcher or AnchorAccountFetcher(self.settings)
        self.registry = registry or TokenListRegistry(
            self.settings.token_list_url, timeout=self.settings.registry_timeout
        )
        logger.debug(
            "Price service using RPC %s as %s",
            self.settings.rpc_url,
            self.settings.wallet_address,
        )

    async def __aenter__(self) -> "PriceService":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        await self.fetcher.close()

    async def get_price_by_underlying_mint(self, mint: str) -> RoundPrice:
        """Resolve the current price for one underlying mint.

        Every error is propagated to the caller.
        """
        return await resolve_price(
            mint, self.fetcher, self.program_id, self.settings.rounds_per_page
        )

    async def load_universe(self) -> Universe:
        return await load_universe(
            self.registry,
            self.settings.underlying_mints,
            self.settings.lp_tag,
            self.settings.lp_symbol_prefix,
        )

    async def get_covered_call_price_list(
        self, with_delay: bool = False
    ) -> list[PriceResult]:
        """Build the price list for every covered-call token in the registry.

        Raises:
            RegistryError: If the token registry cannot be resolved. Per-token
                failures are logged and leave that token out.
        """
        return await build_price_list(
            self.load_universe,
            self.get_price_by_underlying_mint,
            throttle=with_delay,
            delay=self.settings.throttle_delay,
        )
