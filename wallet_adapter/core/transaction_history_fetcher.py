"""Transaction History Fetcher - native and token transactions in a trailing window."""

import asyncio
import logging
import time
from typing import List, Dict, Any, Optional

from .blockchain_explorer_service import BlockchainExplorerService
from ..schemas import TransactionHistory

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def window_cutoff(now: Optional[float] = None, window_days: int = 30) -> int:
    """Epoch seconds `window_days` before `now` (defaults to the current time)."""
    if now is None:
        now = time.time()
    return int(now) - window_days * SECONDS_PER_DAY


def after_cutoff(transactions: List[Dict[str, Any]], cutoff: int) -> List[Dict[str, Any]]:
    """Keep records whose `timeStamp` is strictly later than `cutoff`."""
    kept = []
    for tx in transactions:
        try:
            timestamp = int(tx.get('timeStamp'))
        except (TypeError, ValueError):
            logger.debug(f"Dropping transaction without usable timeStamp: {tx.get('hash')}")
            continue
        if timestamp > cutoff:
            kept.append(tx)
    return kept


class TransactionHistoryFetcher:
    """
    Two filtering modes:

    - ``server``: pass ``starttime=<cutoff>`` upstream; the explorer includes
      records stamped exactly at the cutoff.
    - ``client``: fetch unbounded and keep ``timeStamp > cutoff`` locally,
      which excludes the cutoff instant.
    """

    def __init__(self, explorer: BlockchainExplorerService, window_days: int = 30, mode: str = "server"):
        if mode not in ("server", "client"):
            raise ValueError(f"Unknown transaction filter mode: {mode}")
        self.explorer = explorer
        self.window_days = window_days
        self.mode = mode

    async def fetch_recent_transactions(self, address: str, now: Optional[float] = None) -> TransactionHistory:
        cutoff = window_cutoff(now, self.window_days)
        start_time = cutoff if self.mode == "server" else None

        normal, token = await asyncio.gather(
            self.explorer.get_transactions(address, sort='desc', start_time=start_time),
            self.explorer.get_token_transfers(address, sort='desc', start_time=start_time)
        )

        if self.mode == "client":
            normal = after_cutoff(normal, cutoff)
            token = after_cutoff(token, cutoff)

        logger.info(
            f"Wallet {address}: {len(normal)} normal / {len(token)} token transactions "
            f"since {cutoff} ({self.mode} filter)"
        )
        return TransactionHistory(normal_transactions=normal, token_transactions=token)
