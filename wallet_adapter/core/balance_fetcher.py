"""Native balance lookup via a node or the explorer."""

import logging
from typing import Optional

from .blockchain_explorer_service import BlockchainExplorerService
from .node_rpc import NodeRpcService

logger = logging.getLogger(__name__)


class BalanceFetcher:
    """Returns the native balance of an address in its smallest unit (wei)."""

    def __init__(
        self,
        explorer: BlockchainExplorerService,
        node: Optional[NodeRpcService] = None,
        source: str = "explorer"
    ):
        if source == "rpc" and node is None:
            raise ValueError("rpc balance source needs a NodeRpcService")
        self.explorer = explorer
        self.node = node
        self.source = source

    async def fetch_native_balance(self, address: str) -> int:
        if self.source == "rpc":
            balance = await self.node.get_balance(address)
        else:
            balance = await self.explorer.get_balance(address)
        logger.debug(f"Native balance for {address} via {self.source}: {balance}")
        return balance
