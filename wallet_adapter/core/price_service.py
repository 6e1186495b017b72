"""Price Service - Fetches real-time cryptocurrency prices from CoinGecko API."""

import math
import httpx
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class PriceService:
    """Best-effort USD price lookups.

    Lookups never raise: a failed call, a missing coin or an unusable price all
    come back as ``None`` and the caller decides what that means.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str, native_coin_id: str = "ethereum"):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.native_coin_id = native_coin_id

    async def get_price(self, coin_id: str) -> Optional[float]:
        """Get current USD price for a specific coin id."""
        coin_id = coin_id.lower()
        if not coin_id:
            return None

        try:
            url = f"{self.base_url}/simple/price"
            params = {
                'ids': coin_id,
                'vs_currencies': 'usd'
            }

            response = await self.client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"API error fetching price for {coin_id}: HTTP {e.response.status_code}")
            return None
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"API error fetching price for {coin_id}: {e.__class__.__name__}")
            return None

        entry = data.get(coin_id) if isinstance(data, dict) else None
        if not isinstance(entry, dict) or 'usd' not in entry:
            return None

        return self._usable(entry['usd'])

    async def get_native_price(self) -> Optional[float]:
        """Get current price of the chain's native currency."""
        return await self.get_price(self.native_coin_id)

    async def get_token_price(self, symbol: str) -> Optional[float]:
        """Price lookup keyed by a token's lower-cased symbol."""
        return await self.get_price(symbol.lower())

    @staticmethod
    def _usable(value) -> Optional[float]:
        if isinstance(value, bool):
            return None
        try:
            price = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(price) or price <= 0:
            return None
        return price
