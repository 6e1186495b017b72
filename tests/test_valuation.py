"""Pytest tests for wallet valuation."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from wallet_adapter.core.price_service import PriceService
from wallet_adapter.core.valuation_service import (
    DEFAULT_NATIVE_PRICE,
    ValuationService,
    quantize_price,
    token_value,
)
from wallet_adapter.schemas import TokenBalanceEntry

from conftest import PRICE_URL, TOKEN_BAR, TOKEN_FOO

NATIVE = 3 * 10 ** 18


def _entry(contract, symbol, decimals, balance):
    return TokenBalanceEntry(token_address=contract, symbol=symbol, name=symbol, decimals=decimals, balance=str(balance))


@pytest.fixture
def valuation(upstream):
    return ValuationService(PriceService(upstream.client(), PRICE_URL, "ethereum"))


def test_token_value_exact_integer_math():
    two_tokens = 2_000000000000000000
    assert token_value(two_tokens, 18, 1.5) == 3_000000000000000000
    assert token_value(5, 0, 2.0) == 10 * 10 ** 18
    # 1 unit of a 6-decimal token at $1 is 1e-6 USD, i.e. 1e12 at 18 decimals
    assert token_value(1, 6, 1.0) == 10 ** 12


def test_quantize_price_floors():
    assert quantize_price(1.5) == 1_500000000000000000
    assert isinstance(quantize_price(0.1), int)


def test_no_tokens_total_is_native_balance(upstream, valuation):
    upstream.prices["ethereum"] = 3000.0

    result = asyncio.run(valuation.value_wallet(NATIVE, []))

    assert result.total_value == NATIVE
    assert result.native_price == 3000.0


def test_native_price_failure_defaults_to_one(upstream, valuation, caplog):
    upstream.prices["ethereum"] = httpx.Response(429, json={"status": {"error_code": 429}})

    with caplog.at_level("WARNING"):
        result = asyncio.run(valuation.value_wallet(NATIVE, []))

    assert result.total_value == NATIVE
    assert result.native_price == DEFAULT_NATIVE_PRICE
    assert "using 1.0" in caplog.text


def test_priced_tokens_are_added(upstream, valuation):
    upstream.prices["ethereum"] = 3000.0
    upstream.prices["foo"] = 2.0
    upstream.prices["bar"] = 1.5
    tokens = [
        _entry(TOKEN_FOO, "FOO", 0, 5),
        _entry(TOKEN_BAR, "BAR", 18, 2 * 10 ** 18),
    ]

    total = asyncio.run(valuation.calculate_total_value(NATIVE, tokens))

    assert total == NATIVE + 10 * 10 ** 18 + 3 * 10 ** 18
    price_ids = sorted(r.url.params["ids"] for r in upstream.requests)
    assert price_ids == ["bar", "ethereum", "foo"]


def test_unpriced_tokens_are_skipped(upstream, valuation):
    upstream.prices["ethereum"] = 3000.0
    upstream.prices["foo"] = 2.0
    upstream.prices["zero"] = 0
    upstream.prices["down"] = httpx.Response(500)
    tokens = [
        _entry(TOKEN_FOO, "FOO", 0, 5),
        _entry(TOKEN_BAR, "ZERO", 0, 100),
        _entry(TOKEN_BAR, "DOWN", 0, 100),
        _entry(TOKEN_BAR, "MISSING", 0, 100),
        _entry(TOKEN_BAR, "", 0, 100),
    ]

    total = asyncio.run(valuation.calculate_total_value(NATIVE, tokens))

    assert total == NATIVE + 10 * 10 ** 18


class _BrokenPriceService:
    native_coin_id = "ethereum"

    async def get_native_price(self):
        return 2000.0

    async def get_token_price(self, symbol):
        raise RuntimeError("price path broken")


def test_unexpected_failure_falls_back_to_native_balance():
    valuation = ValuationService(_BrokenPriceService())

    total = asyncio.run(valuation.calculate_total_value(NATIVE, [_entry(TOKEN_FOO, "FOO", 0, 5)]))

    assert total == NATIVE


@pytest.mark.parametrize("error", [httpx.ConnectError("connection refused"), httpx.ReadTimeout("timed out")])
def test_native_price_transport_error_defaults_to_one(upstream, valuation, error):
    upstream.prices["ethereum"] = error

    result = asyncio.run(valuation.value_wallet(NATIVE, []))

    assert result.total_value == NATIVE
    assert result.native_price == DEFAULT_NATIVE_PRICE


def test_token_price_transport_error_skips_token(upstream, valuation):
    upstream.prices["ethereum"] = 3000.0
    upstream.prices["foo"] = 2.0
    upstream.prices["bar"] = httpx.ReadTimeout("timed out")
    tokens = [_entry(TOKEN_FOO, "FOO", 0, 5), _entry(TOKEN_BAR, "BAR", 0, 100)]

    result = asyncio.run(valuation.value_wallet(NATIVE, tokens))

    assert result.total_value == NATIVE + 10 * 10 ** 18
    assert result.native_price == 3000.0
