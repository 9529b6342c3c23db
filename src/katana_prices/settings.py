"""Settings module with unified configuration precedence: CLI > ENV > CONFIG FILE."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import tomllib
from dotenv import load_dotenv
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .constants import (
    COVERED_CALL_SYMBOL_PREFIX,
    DEFAULT_ROUNDS_PER_PAGE,
    DEFAULT_RPC_URL,
    KATANA_REGISTRY_TAG,
    MAINNET_UNDERLYING_MINTS,
    REGISTRY_TIMEOUT_SECONDS,
    THROTTLE_DELAY_SECONDS,
    TOKEN_LIST_URL,
)

load_dotenv()


def _ephemeral_wallet_address() -> str:
    return str(Keypair().pubkey())


def _validate_pubkey(value: str, field_name: str) -> str:
    try:
        Pubkey.from_string(value)
    except ValueError as exc:
        raise ValueError(f"{field_name} is not a valid public key: {value!r}") from exc
    return value


class PriceServiceSettings(BaseSettings):
    """Single source of truth for configuration. Values may come from:
    - CLI (init kwargs)
    - ENV / .env (prefixed with KATANA_PRICES_)
    - Config file (TOML), lowest precedence

    Built once and never mutated afterwards.
    """

    # --- connection ---
    rpc_url: str = DEFAULT_RPC_URL
    # Read-only identity; a fresh ephemeral key is generated when unset
    wallet_address: str = Field(default_factory=_ephemeral_wallet_address)

    # --- structured product program ---
    structured_program_id: str | None = None
    idl_path: Path | None = None
    rounds_per_page: int = Field(default=DEFAULT_ROUNDS_PER_PAGE, gt=0)

    # --- token universe ---
    underlying_mints: list[str] = Field(
        default_factory=lambda: list(MAINNET_UNDERLYING_MINTS.values())
    )
    token_list_url: str = TOKEN_LIST_URL
    registry_timeout: float = Field(default=REGISTRY_TIMEOUT_SECONDS, gt=0)
    lp_tag: str = KATANA_REGISTRY_TAG
    lp_symbol_prefix: str = COVERED_CALL_SYMBOL_PREFIX

    # --- throttling ---
    throttle_delay: float = Field(default=THROTTLE_DELAY_SECONDS, ge=0)

    # --- logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="KATANA_PRICES_",
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    @field_validator("wallet_address", "structured_program_id")
    @classmethod
    def validate_pubkeys(cls, v: str | None, info: ValidationInfo) -> str | None:
        if v is None:
            return v
        return _validate_pubkey(v, info.field_name)

    @field_validator("underlying_mints")
    @classmethod
    def validate_underlying_mints(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("underlying_mints must not be empty")
        return [_validate_pubkey(mint, "underlying_mints") for mint in v]

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Custom config-file source with explicit precedence: CLI > ENV > FILE."""
        env_cfg = os.environ.get("KATANA_PRICES_CONFIG")
        cfg_path = Path(env_cfg) if env_cfg else None

        class TomlConfigSource(PydanticBaseSettingsSource):
            def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
                super().__init__(settings_cls)
                self._path = path

            def get_field_value(
                self, field: Any, field_name: str
            ) -> tuple[Any, str, bool]:
                return None, "", False

            def __call__(self) -> dict[str, Any]:
                if not self._path:
                    local_config = Path("katana-prices.toml")
                    user_config = (
                        Path.home() / ".config" / "katana-prices" / "config.toml"
                    )
                    if local_config.exists():
                        self._path = local_config
                    elif user_config.exists():
                        self._path = user_config
                    else:
                        return {}

                if not self._path.exists():
                    return {}

                with self._path.open("rb") as f:
                    data = tomllib.load(f)  # supports top-level or [katana_prices]
                body = data.get("katana_prices", data)
                if not isinstance(body, dict):
                    return {}
                return body

        return (
            init_settings,  # CLI (highest)
            env_settings,  # ENV
            TomlConfigSource(settings_cls, cfg_path),  # CONFIG (lowest)
            file_secret_settings,
        )

    def as_safe_dict(self) -> dict[str, Any]:
        """Return the config as a JSON-friendly dict."""
        return self.model_dump(mode="json")

    @property
    def structured_program_id_required(self) -> str:
        """Get structured_program_id, raising ValueError if not set."""
        if self.structured_program_id is None:
            raise ValueError("structured_program_id must be configured")
        return self.structured_program_id

    @property
    def program_id(self) -> Pubkey:
        return Pubkey.from_string(self.structured_program_id_required)

    @property
    def wallet_pubkey(self) -> Pubkey:
        return Pubkey.from_string(self.wallet_address)
