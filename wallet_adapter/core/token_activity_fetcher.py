"""Token Activity Fetcher - derives a wallet's ERC-20 holdings from its transfer history."""

import asyncio
import logging
from typing import List, Dict, Any

from .blockchain_explorer_service import BlockchainExplorerService
from .exceptions import UpstreamError
from ..schemas import TokenBalanceEntry

logger = logging.getLogger(__name__)


def unique_token_contracts(transfers: List[Dict[str, Any]]) -> List[str]:
    """Distinct `contractAddress` values, first-seen order, compared case-insensitively."""
    seen: Dict[str, str] = {}
    for event in transfers:
        contract = event.get('contractAddress')
        if not contract:
            continue
        seen.setdefault(contract.lower(), contract)
    return list(seen.values())


class TokenActivityFetcher:
    """Builds one `TokenBalanceEntry` per token contract the wallet has touched."""

    def __init__(self, explorer: BlockchainExplorerService):
        self.explorer = explorer

    async def fetch_token_balances(self, address: str) -> List[TokenBalanceEntry]:
        """
        Fetch current balances for every token seen in `address`'s transfer events.

        Metadata and balance for each token are fetched concurrently; a failure on
        either one fails the whole lookup rather than producing a zero entry.

        Returns:
            Entries with a balance strictly greater than zero.
        """
        transfers = await self.explorer.get_token_transfers(address, sort='desc')
        contracts = unique_token_contracts(transfers)
        logger.info(f"Wallet {address}: {len(transfers)} token transfers across {len(contracts)} contracts")

        if not contracts:
            return []

        entries = await asyncio.gather(
            *(self._fetch_token_entry(address, contract) for contract in contracts)
        )
        return [entry for entry in entries if entry.raw_balance > 0]

    async def _fetch_token_entry(self, address: str, contract: str) -> TokenBalanceEntry:
        info, balance = await asyncio.gather(
            self.explorer.get_token_info(contract),
            self.explorer.get_token_balance(address, contract)
        )
        return TokenBalanceEntry(
            token_address=contract,
            symbol=str(info.get('symbol') or ''),
            name=str(info.get('name') or info.get('tokenName') or ''),
            decimals=self._decimals(info, contract),
            balance=str(max(balance, 0))
        )

    @staticmethod
    def _decimals(info: Dict[str, Any], contract: str) -> int:
        # Etherscan's tokeninfo calls it "divisor"
        raw = info.get('decimals', info.get('divisor'))
        try:
            decimals = int(str(raw))
        except (TypeError, ValueError) as e:
            raise UpstreamError(f"Error getting token info: bad decimals {raw!r} for {contract}", source="explorer") from e
        if decimals < 0:
            raise UpstreamError(f"Error getting token info: bad decimals {raw!r} for {contract}", source="explorer")
        return decimals
