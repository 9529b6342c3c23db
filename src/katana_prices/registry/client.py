"""Token registry clients."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod

import requests

from ..constants import REGISTRY_TIMEOUT_SECONDS, TOKEN_LIST_URL
from ..errors import RegistryError
from ..logger import get_logger
from .models import RegistryToken, parse_token_list

logger = get_logger(__name__)


class BaseTokenRegistry(ABC):
    """Abstract base class for token registries."""

    @abstractmethod
    async def resolve_token_list(self) -> list[RegistryToken]:
        """Return every token the registry lists, in registry order.

        Raises:
            RegistryError: If the registry is unreachable or malformed.
        """
        ...


class TokenListRegistry(BaseTokenRegistry):
    """Registry backed by the published Solana token list JSON."""

    def __init__(
        self,
        url: str = TOKEN_LIST_URL,
        *,
        timeout: float = REGISTRY_TIMEOUT_SECONDS,
    ):
        self.url = url
        self.timeout = timeout

    async def _http_get(self, url: str) -> requests.Response:
        return await asyncio.to_thread(
            lambda: requests.get(url, timeout=self.timeout)
        )

    async def resolve_token_list(self) -> list[RegistryToken]:
        logger.debug("Fetching token registry from %s", self.url)
        try:
            response = await self._http_get(self.url)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise RegistryError(
                f"Token registry unreachable at {self.url}: {exc}"
            ) from exc
        except ValueError as exc:
            raise RegistryError(f"Token registry returned invalid JSON: {exc}") from exc

        tokens = parse_token_list(payload)
        logger.debug("Token registry lists %d tokens", len(tokens))
        return tokens
