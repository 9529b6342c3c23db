"""Account fetching for structured product state and price pages."""

from __future__ import annotations

import zlib
from abc import ABC, abstractmethod
from typing import Any

import httpx
from anchorpy import Program, Provider
from anchorpy.error import AccountDoesNotExistError, AccountInvalidDiscriminator
from construct import ConstructError
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.core import RPCException
from solders.pubkey import Pubkey

from ..constants import PRICE_PER_SHARE_PAGE_ACCOUNT, STATE_ACCOUNT
from ..domain import PriceHistoryPage, StateRecord
from ..errors import AccountNotFound, FetchError
from ..logger import get_logger
from ..settings import PriceServiceSettings
from .idl import build_program

logger = get_logger(__name__)

# Transport failures and JSON-RPC error replies
RPC_ERRORS = (SolanaRpcException, RPCException, httpx.HTTPError)


def _describe(exc: Exception) -> str:
    if isinstance(exc, SolanaRpcException):
        return exc.error_msg
    return str(exc)


class ReadonlyWallet:
    """Wallet that only carries an identity and refuses to sign."""

    def __init__(self, public_key: Pubkey):
        self.public_key = public_key

    def sign_transaction(self, tx: Any) -> Any:
        raise RuntimeError("Read-only wallet cannot sign transactions")

    def sign_all_transactions(self, txs: list[Any]) -> list[Any]:
        raise RuntimeError("Read-only wallet cannot sign transactions")


class BaseAccountFetcher(ABC):
    """Abstract base class for structured product account fetchers."""

    @abstractmethod
    async def fetch_account(self, address: Pubkey, account_type: str) -> Any:
        """Fetch and decode the account at ``address``.

        Raises:
            AccountNotFound: If the account does not exist or has no data.
            FetchError: On transport failure or undecodable data.
        """
        ...

    async def close(self) -> None:
        """Release any connection held by the fetcher."""

    async def fetch_state(self, address: Pubkey) -> StateRecord:
        raw = await self.fetch_account(address, STATE_ACCOUNT)
        try:
            return StateRecord(
                round=int(raw.round),
                decimals=int(raw.decimals),
                underlying_mint=str(raw.underlying_token_mint),
                derivative_mint=str(raw.derivative_token_mint),
                quote_mint=str(raw.quote_token_mint),
            )
        except (AttributeError, TypeError, ValueError) as exc:
            raise FetchError(
                f"Unexpected state account layout at {address}: {exc}"
            ) from exc

    async def fetch_price_page(self, address: Pubkey) -> PriceHistoryPage:
        raw = await self.fetch_account(address, PRICE_PER_SHARE_PAGE_ACCOUNT)
        try:
            return PriceHistoryPage(prices=[int(p) for p in raw.prices])
        except (AttributeError, TypeError, ValueError) as exc:
            raise FetchError(
                f"Unexpected price page account layout at {address}: {exc}"
            ) from exc


class AnchorAccountFetcher(BaseAccountFetcher):
    """Fetch accounts through an Anchor program client over Solana RPC."""

    def __init__(self, settings: PriceServiceSettings):
        self.program_id = settings.program_id
        self.idl_path = settings.idl_path
        self.connection = AsyncClient(settings.rpc_url)
        self.provider = Provider(
            self.connection,
            ReadonlyWallet(settings.wallet_pubkey),  # type: ignore[arg-type]
        )
        self._program: Program | None = None

    async def _get_program(self) -> Program:
        if self._program is None:
            try:
                self._program = await build_program(
                    self.program_id, self.provider, self.idl_path
                )
            except RPC_ERRORS as exc:
                raise FetchError(
                    f"Failed to load program {self.program_id}: {_describe(exc)}"
                ) from exc
            except (ConstructError, zlib.error, ValueError, OSError) as exc:
                raise FetchError(
                    f"Unreadable IDL for program {self.program_id}: {exc}"
                ) from exc
        return self._program

    async def fetch_account(self, address: Pubkey, account_type: str) -> Any:
        program = await self._get_program()
        logger.debug("Fetching %s account %s", account_type, address)
        try:
            return await program.account[account_type].fetch(address)
        except AccountDoesNotExistError as exc:
            raise AccountNotFound(str(address), account_type) from exc
        except AccountInvalidDiscriminator as exc:
            raise FetchError(
                f"Account {address} is not a {account_type} account"
            ) from exc
        except ConstructError as exc:
            raise FetchError(
                f"Could not decode {account_type} account {address}: {exc}"
            ) from exc
        except RPC_ERRORS as exc:
            raise FetchError(
                f"RPC request for {account_type} account {address} failed: "
                f"{_describe(exc)}"
            ) from exc

    async def close(self) -> None:
        await self.connection.close()
