"""Wallet Profile Service - runs one job request end to end."""

import asyncio
import logging
from typing import Any, List, Optional, Union

import httpx

from .balance_fetcher import BalanceFetcher
from .blockchain_explorer_service import BlockchainExplorerService
from .config import Settings
from .exceptions import AdapterError, ValidationError
from .node_rpc import NodeRpcService
from .price_service import PriceService
from .token_activity_fetcher import TokenActivityFetcher
from .transaction_history_fetcher import TransactionHistoryFetcher, after_cutoff, window_cutoff
from .validator import job_id_of, validate_job_request
from .valuation_service import ValuationService
from ..schemas import (
    JobError,
    JobResult,
    SummaryData,
    SummaryResult,
    TokenBalanceEntry,
    TransactionHistory,
    WalletProfile,
    WalletSummary,
)

logger = logging.getLogger(__name__)

# Block range the summary passes on tokentx / txlist.
SUMMARY_TOKEN_END_BLOCK = 999999999
SUMMARY_TX_END_BLOCK = 99999999


def assemble_profile(
    job_id: str,
    native_balance: int,
    native_price: float,
    tokens: List[TokenBalanceEntry],
    history: TransactionHistory,
    total_value: int
) -> JobResult:
    """Merge the fetched pieces into a success Job Result."""
    return JobResult(
        job_run_id=job_id,
        data=WalletProfile(
            eth_balance=str(native_balance),
            eth_price_usd=native_price,
            token_balances=tokens,
            transactions=history,
            total_value=str(total_value),
            normal_tx_count=len(history.normal_transactions),
            token_tx_count=len(history.token_transactions),
        ),
        status_code=200,
    )


def error_result(error: Exception, job_id: Optional[str]) -> JobError:
    """Convert a fatal error into the errored Job Result shape."""
    if isinstance(error, ValidationError) and error.job_id is not None:
        job_id = error.job_id
    status_code = error.status_code if isinstance(error, AdapterError) else 500
    return JobError(job_run_id=job_id, error=str(error) or error.__class__.__name__, status_code=status_code)


class WalletProfileService:
    """Entry point the HTTP layer calls; never raises, always returns a result."""

    def __init__(
        self,
        balance_fetcher: BalanceFetcher,
        token_fetcher: TokenActivityFetcher,
        history_fetcher: TransactionHistoryFetcher,
        valuation: ValuationService,
        explorer: BlockchainExplorerService
    ):
        self.balance_fetcher = balance_fetcher
        self.token_fetcher = token_fetcher
        self.history_fetcher = history_fetcher
        self.valuation = valuation
        self.explorer = explorer

    @classmethod
    def from_settings(cls, settings: Settings, client: httpx.AsyncClient) -> "WalletProfileService":
        """Wire every component from the process settings and one shared HTTP client."""
        explorer = BlockchainExplorerService(client, settings.ETHERSCAN_API_URL, settings.ETHERSCAN_API_KEY)
        node = NodeRpcService(client, settings.RPC_URL) if settings.RPC_URL else None
        prices = PriceService(client, settings.COINGECKO_API_URL, settings.NATIVE_PRICE_ID)
        return cls(
            balance_fetcher=BalanceFetcher(explorer, node, settings.balance_source),
            token_fetcher=TokenActivityFetcher(explorer),
            history_fetcher=TransactionHistoryFetcher(explorer, settings.TX_WINDOW_DAYS, settings.TX_FILTER_MODE),
            valuation=ValuationService(prices),
            explorer=explorer,
        )

    async def create_request(self, payload: Any) -> Union[JobResult, JobError]:
        """Full wallet profile: balances, token holdings, recent activity and total value."""
        job_id = job_id_of(payload)
        try:
            request = validate_job_request(payload)
            logger.info(f"Processing request {request.job_id} for wallet {request.address}")

            native_balance, tokens, history = await asyncio.gather(
                self.balance_fetcher.fetch_native_balance(request.address),
                self.token_fetcher.fetch_token_balances(request.address),
                self.history_fetcher.fetch_recent_transactions(request.address),
            )

            valuation = await self.valuation.value_wallet(native_balance, tokens)

            return assemble_profile(
                request.job_id, native_balance, valuation.native_price, tokens, history, valuation.total_value
            )
        except Exception as e:
            logger.error(f"Job {job_id} failed: {e}")
            return error_result(e, job_id)

    async def create_summary(self, payload: Any, now: Optional[float] = None) -> Union[SummaryResult, JobError]:
        """
        Simple summary: explorer balance, the raw token transfer list, and native
        transactions from the trailing window filtered locally (strictly after
        the cutoff). Steps run one after another.
        """
        job_id = job_id_of(payload)
        try:
            request = validate_job_request(payload)
            logger.info(f"Processing summary {request.job_id} for wallet {request.address}")

            native_balance = await self.explorer.get_balance(request.address)
            erc20_events = await self.explorer.get_token_transfers(
                request.address, sort='asc', start_block=0, end_block=SUMMARY_TOKEN_END_BLOCK
            )
            transactions = await self.explorer.get_transactions(
                request.address, sort='desc', start_block=0, end_block=SUMMARY_TX_END_BLOCK
            )
            cutoff = window_cutoff(now, self.history_fetcher.window_days)

            summary = WalletSummary(
                eth_balance=str(native_balance),
                erc20_balances=erc20_events,
                recent_transactions=after_cutoff(transactions, cutoff),
            )
            return SummaryResult(
                job_run_id=request.job_id,
                data=SummaryData(result=summary),
                result=summary,
                status_code=200,
            )
        except Exception as e:
            logger.error(f"Summary {job_id} failed: {e}")
            return error_result(e, job_id)
