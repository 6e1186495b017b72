"""Blockchain Explorer Service - Etherscan-compatible account and token queries."""

import httpx
import logging
from typing import List, Dict, Any, Optional

from .exceptions import UpstreamError

logger = logging.getLogger(__name__)

# Etherscan answers an empty history with status "0" instead of an empty success.
_EMPTY_RESULT_MESSAGES = ("no transactions found", "no token transfers found", "no records found")


class BlockchainExplorerService:
    """Thin async wrapper over the explorer's `module`/`action` GET API.

    Every method raises `UpstreamError` when the call fails at the transport
    level, returns an HTTP error, or the explorer reports `status != "1"`.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str, api_key: Optional[str] = None):
        self.client = client
        self.base_url = base_url
        self.api_key = api_key

    async def _request(self, params: Dict[str, Any], error_label: str, allow_empty: bool = False) -> Any:
        """Issue one explorer GET and return its `result` member."""
        query = dict(params)
        if self.api_key:
            query['apikey'] = self.api_key

        try:
            response = await self.client.get(self.base_url, params=query)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"{error_label}: HTTP {e.response.status_code} for action={params.get('action')}")
            raise UpstreamError(f"{error_label}: HTTP {e.response.status_code}", source="explorer") from e
        except httpx.HTTPError as e:
            logger.error(f"{error_label}: {e.__class__.__name__} for action={params.get('action')}")
            raise UpstreamError(f"{error_label}: {e.__class__.__name__}", source="explorer") from e
        except ValueError as e:
            raise UpstreamError(f"{error_label}: invalid JSON response", source="explorer") from e

        if not isinstance(data, dict):
            raise UpstreamError(f"{error_label}: unexpected response", source="explorer")

        result = data.get('result')
        if str(data.get('status')) != '1':
            message = str(data.get('message') or 'Unknown error')
            if allow_empty and result == [] and message.lower() in _EMPTY_RESULT_MESSAGES:
                return []
            if isinstance(result, str) and result and result != message:
                message = f"{message} - {result}"
            logger.error(f"{error_label}: {message} (action={params.get('action')})")
            raise UpstreamError(f"{error_label}: {message}", source="explorer")

        return result

    @staticmethod
    def _to_int(value: Any, error_label: str) -> int:
        try:
            return int(str(value))
        except (TypeError, ValueError) as e:
            raise UpstreamError(f"{error_label}: non-integer value {value!r}", source="explorer") from e

    @staticmethod
    def _to_list(value: Any, error_label: str) -> List[Dict[str, Any]]:
        if not isinstance(value, list):
            raise UpstreamError(f"{error_label}: expected a list result", source="explorer")
        return value

    async def get_balance(self, address: str) -> int:
        """Native balance in the smallest unit."""
        params = {
            'module': 'account',
            'action': 'balance',
            'address': address,
            'tag': 'latest',
        }
        result = await self._request(params, "Error getting balance")
        return self._to_int(result, "Error getting balance")

    async def get_token_transfers(
        self,
        address: str,
        sort: str = 'desc',
        start_time: Optional[int] = None,
        start_block: Optional[int] = None,
        end_block: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """ERC-20 transfer events involving `address`."""
        params = self._list_params('tokentx', address, sort, start_time, start_block, end_block)
        result = await self._request(params, "Etherscan API error", allow_empty=True)
        return self._to_list(result, "Etherscan API error")

    async def get_transactions(
        self,
        address: str,
        sort: str = 'desc',
        start_time: Optional[int] = None,
        start_block: Optional[int] = None,
        end_block: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """Native (external) transactions involving `address`."""
        params = self._list_params('txlist', address, sort, start_time, start_block, end_block)
        result = await self._request(params, "Etherscan API error", allow_empty=True)
        return self._to_list(result, "Etherscan API error")

    async def get_token_info(self, contract_address: str) -> Dict[str, Any]:
        """Metadata record for a token contract."""
        params = {
            'module': 'token',
            'action': 'tokeninfo',
            'contractaddress': contract_address,
        }
        result = await self._request(params, "Error getting token info")
        if isinstance(result, list):
            result = result[0] if result else None
        if not isinstance(result, dict):
            raise UpstreamError(f"Error getting token info: no data for {contract_address}", source="explorer")
        return result

    async def get_token_balance(self, address: str, contract_address: str) -> int:
        """Balance of one token for `address`, in the token's smallest unit."""
        params = {
            'module': 'account',
            'action': 'tokenbalance',
            'contractaddress': contract_address,
            'address': address,
            'tag': 'latest',
        }
        result = await self._request(params, "Error getting token balance")
        return self._to_int(result, "Error getting token balance")

    @staticmethod
    def _list_params(
        action: str,
        address: str,
        sort: str,
        start_time: Optional[int],
        start_block: Optional[int],
        end_block: Optional[int]
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            'module': 'account',
            'action': action,
            'address': address,
            'sort': sort,
        }
        if start_time is not None:
            params['starttime'] = start_time
        if start_block is not None:
            params['startblock'] = start_block
        if end_block is not None:
            params['endblock'] = end_block
        return params
