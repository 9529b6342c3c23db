from __future__ import annotations

from .client import BaseTokenRegistry, TokenListRegistry
from .models import RegistryToken, parse_token_list
from .universe import load_universe

__all__ = [
    "BaseTokenRegistry",
    "RegistryToken",
    "TokenListRegistry",
    "load_universe",
    "parse_token_list",
]
