import pytest

from katana_prices.domain import DerivativeTokenMeta, TokenMeta
from katana_prices.errors import RegistryError
from katana_prices.registry.universe import load_universe

SOL = "So11111111111111111111111111111111111111112"
MSOL = "mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So"
KC_SOL = "kcSoL11111111111111111111111111111111111111"
KC_MSOL = "kcMsoL1111111111111111111111111111111111111"

REGISTRY = [
    {"address": MSOL, "symbol": "mSOL", "extensions": {"coingeckoId": "msol"}},
    {"address": "Other1111111111111111111111111111111111111", "symbol": "OTHER"},
    {"address": SOL, "symbol": "SOL", "extensions": {"coingeckoId": "solana"}},
    {"address": KC_SOL, "symbol": "kcSOL", "tags": ["Katana", "lp-token"]},
    {"address": KC_MSOL, "symbol": "kcmSOL", "tags": ["Katana"]},
    {
        "address": "Vault11111111111111111111111111111111111111",
        "symbol": "kVAULT",
        "tags": ["Katana"],
    },
    {"address": "Untag111111111111111111111111111111111111111", "symbol": "kcFAKE"},
]


@pytest.mark.asyncio
async def test_load_universe_filters_and_projects(make_registry):
    registry = make_registry(REGISTRY)

    universe = await load_universe(registry, [SOL, MSOL], "Katana", "kc")

    assert universe.underlying == [
        TokenMeta(symbol="mSOL", address=MSOL, coingecko_id="msol"),
        TokenMeta(symbol="SOL", address=SOL, coingecko_id="solana"),
    ]
    assert universe.derivatives == [
        DerivativeTokenMeta(symbol="kcSOL", address=KC_SOL),
        DerivativeTokenMeta(symbol="kcmSOL", address=KC_MSOL),
    ]
    assert registry.calls == 1


@pytest.mark.asyncio
async def test_load_universe_dedupes_by_full_value(make_registry):
    registry = make_registry(
        [
            {"address": SOL, "symbol": "SOL", "extensions": {"coingeckoId": "solana"}},
            {"address": SOL, "symbol": "SOL", "extensions": {"coingeckoId": "solana"}},
            {"address": SOL, "symbol": "wSOL", "extensions": {"coingeckoId": "solana"}},
            {"address": KC_SOL, "symbol": "kcSOL", "tags": ["Katana"]},
            {"address": KC_SOL, "symbol": "kcSOL", "tags": ["Katana", "lp-token"]},
        ]
    )

    universe = await load_universe(registry, [SOL], "Katana", "kc")

    assert [t.symbol for t in universe.underlying] == ["SOL", "wSOL"]
    assert universe.derivatives == [DerivativeTokenMeta(symbol="kcSOL", address=KC_SOL)]


@pytest.mark.asyncio
async def test_find_derivative_by_address(make_registry):
    universe = await load_universe(make_registry(REGISTRY), [SOL], "Katana", "kc")

    assert universe.find_derivative(KC_MSOL) == DerivativeTokenMeta(
        symbol="kcmSOL", address=KC_MSOL
    )
    assert universe.find_derivative("unknown") is None


@pytest.mark.asyncio
async def test_load_universe_propagates_registry_error(make_registry):
    registry = make_registry(RegistryError("registry down"))

    with pytest.raises(RegistryError, match="registry down"):
        await load_universe(registry, [SOL], "Katana", "kc")
