"""JSON-RPC access to an Ethereum-compatible node."""

import httpx
import logging
from typing import Any, List

from .exceptions import UpstreamError

logger = logging.getLogger(__name__)


class NodeRpcService:
    """Minimal JSON-RPC 2.0 client; only what the adapter reads from a node."""

    def __init__(self, client: httpx.AsyncClient, rpc_url: str):
        self.client = client
        self.rpc_url = rpc_url

    async def call(self, method: str, params: List[Any]) -> Any:
        payload = {
            "id": 1,
            "jsonrpc": "2.0",
            "method": method,
            "params": params
        }

        try:
            response = await self.client.post(self.rpc_url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"RPC {method} failed: HTTP {e.response.status_code}")
            raise UpstreamError(f"RPC {method} failed: HTTP {e.response.status_code}", source="rpc") from e
        except httpx.HTTPError as e:
            # transport errors can carry the node URL, which may embed a key
            logger.error(f"RPC {method} failed: {e.__class__.__name__}")
            raise UpstreamError(f"RPC {method} failed: {e.__class__.__name__}", source="rpc") from e
        except ValueError as e:
            raise UpstreamError(f"RPC {method} failed: invalid JSON response", source="rpc") from e

        if not isinstance(data, dict):
            raise UpstreamError(f"RPC {method} failed: unexpected response", source="rpc")
        if data.get('error'):
            error = data['error']
            message = error.get('message', error) if isinstance(error, dict) else error
            logger.error(f"RPC {method} returned error: {message}")
            raise UpstreamError(f"RPC error: {message}", source="rpc")
        if 'result' not in data:
            raise UpstreamError(f"RPC {method} failed: missing result", source="rpc")

        return data['result']

    async def get_balance(self, address: str) -> int:
        """`eth_getBalance` at the latest block, decoded from hex quantity."""
        result = await self.call("eth_getBalance", [address, "latest"])
        try:
            return int(result, 16)
        except (TypeError, ValueError) as e:
            raise UpstreamError(f"RPC eth_getBalance returned {result!r}", source="rpc") from e
