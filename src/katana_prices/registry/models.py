"""Typed schema for token registry entries."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import RegistryError
from ..logger import TRACE, get_logger

logger = get_logger(__name__)


class RegistryTokenExtensions(BaseModel):
    coingecko_id: str | None = Field(default=None, alias="coingeckoId")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RegistryToken(BaseModel):
    """A token registry entry stripped to the fields the price list uses."""

    address: str
    symbol: str
    tags: list[str] = Field(default_factory=list)
    extensions: RegistryTokenExtensions = Field(
        default_factory=RegistryTokenExtensions
    )

    model_config = ConfigDict(extra="ignore", frozen=True)

    @property
    def coingecko_id(self) -> str | None:
        return self.extensions.coingecko_id

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


def parse_token_list(payload: Any) -> list[RegistryToken]:
    """Validate a token list payload into registry entries.

    Entries that do not match the schema are skipped.

    Raises:
        RegistryError: If the payload is not a token list.
    """
    raw_tokens = payload.get("tokens") if isinstance(payload, dict) else None
    if not isinstance(raw_tokens, list):
        raise RegistryError("Token registry payload has no 'tokens' list")

    tokens: list[RegistryToken] = []
    skipped = 0
    for raw in raw_tokens:
        try:
            tokens.append(RegistryToken.model_validate(raw))
        except ValidationError as exc:
            skipped += 1
            logger.log(TRACE, "Skipping malformed registry entry %r: %s", raw, exc)

    if skipped:
        logger.debug("Skipped %d malformed registry entries", skipped)
    return tokens
