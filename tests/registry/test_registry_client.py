from unittest.mock import Mock

import pytest
import requests

from katana_prices.errors import RegistryError
from katana_prices.registry.client import TokenListRegistry


def _response(payload=None, *, status_error=None, json_error=None):
    response = Mock()
    response.raise_for_status = Mock(side_effect=status_error)
    if json_error is not None:
        response.json = Mock(side_effect=json_error)
    else:
        response.json = Mock(return_value=payload)
    return response


@pytest.mark.asyncio
async def test_resolve_token_list_parses_payload(monkeypatch):
    get = Mock(
        return_value=_response(
            {
                "tokens": [
                    {"address": "a1", "symbol": "AAA"},
                    {"address": "b2", "symbol": "kcAAA", "tags": ["Katana"]},
                ]
            }
        )
    )
    monkeypatch.setattr(requests, "get", get)
    registry = TokenListRegistry("https://registry.example/tokens.json", timeout=3.0)

    tokens = await registry.resolve_token_list()

    assert [t.address for t in tokens] == ["a1", "b2"]
    get.assert_called_once_with("https://registry.example/tokens.json", timeout=3.0)


@pytest.mark.asyncio
async def test_unreachable_registry_raises_registry_error(monkeypatch):
    monkeypatch.setattr(
        requests, "get", Mock(side_effect=requests.ConnectionError("dns failure"))
    )
    registry = TokenListRegistry()

    with pytest.raises(RegistryError, match="unreachable"):
        await registry.resolve_token_list()


@pytest.mark.asyncio
async def test_http_error_raises_registry_error(monkeypatch):
    monkeypatch.setattr(
        requests,
        "get",
        Mock(return_value=_response(status_error=requests.HTTPError("503"))),
    )
    registry = TokenListRegistry()

    with pytest.raises(RegistryError, match="unreachable"):
        await registry.resolve_token_list()


@pytest.mark.asyncio
async def test_invalid_json_raises_registry_error(monkeypatch):
    monkeypatch.setattr(
        requests,
        "get",
        Mock(return_value=_response(json_error=ValueError("Expecting value"))),
    )
    registry = TokenListRegistry()

    with pytest.raises(RegistryError, match="invalid JSON"):
        await registry.resolve_token_list()


@pytest.mark.asyncio
@pytest.mark.integration
async def test_resolve_live_token_list():
    tokens = await TokenListRegistry().resolve_token_list()
    assert any(t.symbol == "SOL" for t in tokens)
