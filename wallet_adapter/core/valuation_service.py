"""Valuation - totals a wallet's native balance and priced token holdings."""

import asyncio
import logging
import math
from typing import List, NamedTuple

from .price_service import PriceService
from ..schemas import TokenBalanceEntry

logger = logging.getLogger(__name__)

DEFAULT_NATIVE_PRICE = 1.0


class WalletValuation(NamedTuple):
    total_value: int
    native_price: float


def quantize_price(price: float) -> int:
    """USD price as an integer with 18 implied decimals (floored)."""
    return math.floor(price * 1e18)


def token_value(balance: int, decimals: int, price: float) -> int:
    """floor(balance * floor(price * 1e18) / 10**decimals), all in integers."""
    return balance * quantize_price(price) // (10 ** decimals)


class ValuationService:
    """Computes `totalValue` for a wallet profile.

    Price lookups are best-effort: a token without a price contributes nothing,
    and a missing native price is logged and replaced with 1.
    """

    def __init__(self, price_service: PriceService):
        self.price_service = price_service

    async def get_native_price(self) -> float:
        price = await self.price_service.get_native_price()
        if price is None:
            logger.warning(f"No price for {self.price_service.native_coin_id}, using {DEFAULT_NATIVE_PRICE}")
            return DEFAULT_NATIVE_PRICE
        return price

    async def calculate_total_value(self, native_balance: int, tokens: List[TokenBalanceEntry]) -> int:
        valuation = await self.value_wallet(native_balance, tokens)
        return valuation.total_value

    async def value_wallet(self, native_balance: int, tokens: List[TokenBalanceEntry]) -> WalletValuation:
        """
        Sum the native balance and every token that has a price.

        Args:
            native_balance: Balance in wei; the running total starts here.
            tokens: Positive-balance token entries.

        Returns:
            The total as an arbitrary-precision int plus the native price used.
            The total falls back to `native_balance` if anything other than a
            single token's price lookup goes wrong.
        """
        native_price = DEFAULT_NATIVE_PRICE
        try:
            native_price = await self.get_native_price()

            total = native_balance
            prices = await asyncio.gather(
                *(self.price_service.get_token_price(token.symbol) for token in tokens)
            )
            for token, price in zip(tokens, prices):
                if price is None:
                    logger.warning(f"Could not get price for token {token.symbol or token.token_address}")
                    continue
                total += token_value(token.raw_balance, token.decimals, price)

            return WalletValuation(total, native_price)
        except Exception as e:
            logger.error(f"Error calculating total value: {e}")
            return WalletValuation(native_balance, native_price)
