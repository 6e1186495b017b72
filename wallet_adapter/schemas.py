from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, StrictStr, model_validator
from typing import Optional, List, Dict, Any, Literal


# ====================================================================================
# --- Job Request Schemas: What the oracle node sends us. ---
# ====================================================================================
class JobRequestData(BaseModel):
    """
    The `data` object of a job request. The wallet can be passed either as
    `wallet` or as `walletAddress`; any other keys are carried along untouched.
    """
    model_config = ConfigDict(extra="allow")

    wallet: Optional[StrictStr] = Field(None, description="Wallet address to profile.")
    walletAddress: Optional[StrictStr] = Field(None, description="Alternate name for the wallet address.")

    @model_validator(mode="after")
    def require_wallet(self) -> "JobRequestData":
        if self.wallet is None and self.walletAddress is None:
            raise ValueError("Required parameter not supplied: wallet")
        if not self.address:
            raise ValueError("Wallet address must not be empty")
        return self

    @property
    def address(self) -> str:
        """`wallet` when it is non-blank, otherwise `walletAddress`."""
        for candidate in (self.wallet, self.walletAddress):
            if candidate is not None and candidate.strip():
                return candidate.strip()
        return ""


class JobRequest(BaseModel):
    id: StrictStr = Field(..., description="Job run identifier, echoed back as jobRunID.")
    data: JobRequestData


class ValidatedRequest(BaseModel):
    """The validated (job id, wallet address) pair handed to the fetchers."""
    model_config = ConfigDict(frozen=True)

    job_id: str
    address: str


# ====================================================================================
# --- Wallet Data Schemas: Normalized pieces fetched from the explorer. ---
# ====================================================================================
class TokenBalanceEntry(BaseModel):
    """
    One ERC-20 contract the wallet has interacted with, plus its current balance.
    `balance` is kept as a base-10 string so it survives JSON without losing precision.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    token_address: str = Field(..., alias="tokenAddress")
    symbol: str = ""
    name: str = ""
    decimals: int = Field(..., ge=0)
    balance: str = Field(..., pattern=r"^\d+$")

    @property
    def raw_balance(self) -> int:
        return int(self.balance)


class TransactionHistory(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    normal_transactions: List[Dict[str, Any]] = Field(default_factory=list, alias="normalTransactions")
    token_transactions: List[Dict[str, Any]] = Field(default_factory=list, alias="tokenTransactions")


class WalletProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    eth_balance: str = Field(..., alias="ethBalance")
    eth_price_usd: Optional[float] = Field(None, alias="ethPriceUsd")
    token_balances: List[TokenBalanceEntry] = Field(default_factory=list, alias="tokenBalances")
    transactions: TransactionHistory
    total_value: str = Field(..., alias="totalValue")
    normal_tx_count: int = Field(..., alias="normalTxCount")
    token_tx_count: int = Field(..., alias="tokenTxCount")


class WalletSummary(BaseModel):
    """Result of the simple summary: raw explorer data with only the tx window applied."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    eth_balance: str = Field(..., alias="ethBalance")
    erc20_balances: List[Dict[str, Any]] = Field(default_factory=list, alias="erc20Balances")
    recent_transactions: List[Dict[str, Any]] = Field(default_factory=list, alias="recentTransactions")


# ====================================================================================
# --- Job Result Schemas: The only thing the caller ever sees. ---
# ====================================================================================
class JobResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    job_run_id: str = Field(..., alias="jobRunID")
    data: WalletProfile
    status_code: int = Field(200, alias="statusCode")


class SummaryData(BaseModel):
    model_config = ConfigDict(frozen=True)

    result: WalletSummary


class SummaryResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    job_run_id: str = Field(..., alias="jobRunID")
    data: SummaryData
    result: WalletSummary
    status_code: int = Field(200, alias="statusCode")


class JobError(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    job_run_id: Optional[str] = Field(None, alias="jobRunID")
    status: Literal["errored"] = "errored"
    error: str
    status_code: int = Field(500, alias="statusCode")
