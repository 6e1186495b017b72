"""
Pytest fixtures for the wallet adapter. Upstream APIs are replaced by an
in-process fake served through httpx.MockTransport, so no test touches the network.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Union

import httpx
import pytest

from wallet_adapter.core.config import Settings
from wallet_adapter.core.wallet_profile_service import WalletProfileService

EXPLORER_URL = "https://explorer.test/api"
PRICE_URL = "https://prices.test/api/v3"
RPC_URL = "https://node.test/rpc"

WALLET = "0xAbC0000000000000000000000000000000000001"
TOKEN_FOO = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
TOKEN_BAR = "0xdac17f958d2ee523a2206206994597c13d831ec7"


def ok(result: Any) -> Dict[str, Any]:
    return {"status": "1", "message": "OK", "result": result}


def notok(message: str, result: Any = "") -> Dict[str, Any]:
    return {"status": "0", "message": message, "result": result}


Reply = Union[Dict[str, Any], httpx.Response, Callable[[Dict[str, str]], Any]]


class FakeUpstream:
    """Explorer, price index and node in one MockTransport handler.

    `explorer` maps an explorer `action` to a JSON body, an httpx.Response, or a
    callable taking the query params. `prices` maps a coin id to its USD price
    (or an httpx.Response). Any reply may also be an exception instance, which
    the transport raises. Every request is recorded in `requests`.
    """

    def __init__(self):
        self.explorer: Dict[str, Reply] = {}
        self.prices: Dict[str, Any] = {}
        self.rpc_reply: Any = {"jsonrpc": "2.0", "id": 1, "result": "0x0"}
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = dict(request.url.params)
        host = request.url.host

        if host == "explorer.test":
            reply = self.explorer.get(params.get("action"))
            if isinstance(reply, Exception):
                raise reply
            if reply is None:
                return httpx.Response(404, json={"detail": "unexpected action"})
            if callable(reply):
                reply = reply(params)
            if isinstance(reply, httpx.Response):
                return reply
            return httpx.Response(200, json=reply)

        if host == "prices.test":
            coin = params.get("ids")
            price = self.prices.get(coin)
            if isinstance(price, Exception):
                raise price
            if isinstance(price, httpx.Response):
                return price
            if price is None:
                return httpx.Response(200, json={})
            return httpx.Response(200, json={coin: {"usd": price}})

        if host == "node.test":
            body = json.loads(request.content)
            assert body["method"] == "eth_getBalance"
            if isinstance(self.rpc_reply, Exception):
                raise self.rpc_reply
            if isinstance(self.rpc_reply, httpx.Response):
                return self.rpc_reply
            return httpx.Response(200, json=self.rpc_reply)

        return httpx.Response(404)

    def actions(self) -> List[str]:
        """Explorer actions requested so far, in order."""
        return [r.url.params.get("action") for r in self.requests if r.url.host == "explorer.test"]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def _make(**overrides) -> Settings:
        values = {
            "ETHERSCAN_API_KEY": "test-key",
            "ETHERSCAN_API_URL": EXPLORER_URL,
            "COINGECKO_API_URL": PRICE_URL,
            "RPC_URL": None,
            "BALANCE_SOURCE": None,
            "TX_FILTER_MODE": "server",
            "TX_WINDOW_DAYS": 30,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def make_service(upstream, make_settings) -> Callable[..., WalletProfileService]:
    def _make(**overrides) -> WalletProfileService:
        return WalletProfileService.from_settings(make_settings(**overrides), upstream.client())
    return _make


@pytest.fixture
def client(make_service):
    """FastAPI TestClient with the profile service pointed at the fake upstream."""
    from fastapi.testclient import TestClient

    from wallet_adapter.api.adapter import get_wallet_profile_service
    from wallet_adapter.main import app

    service = make_service()
    app.dependency_overrides[get_wallet_profile_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
