"""Application configuration using Pydantic settings."""

from typing import Literal, Optional
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Adapter settings with environment variable support.

    Loaded once at startup and never mutated afterwards.
    """

    # Application Configuration
    APP_NAME: str = Field(default="Wallet Profile Adapter", description="Application name")
    APP_VERSION: str = Field(default="0.1.0", description="Application version")
    DEBUG: bool = Field(default=False, description="Debug mode")
    LOG_LEVEL: str = Field(default="INFO", description="Root log level")

    # Listener
    HOST: str = Field(default="0.0.0.0", description="Interface to bind")
    PORT: int = Field(default=8080, description="Port to listen on")

    # Blockchain Explorer API Configuration
    ETHERSCAN_API_KEY: Optional[str] = Field(default=None, description="Etherscan API key for Ethereum data")
    ETHERSCAN_API_URL: str = Field(default="https://api.etherscan.io/api", description="Etherscan-compatible API base URL")

    # Price index
    COINGECKO_API_URL: str = Field(default="https://api.coingecko.com/api/v3", description="CoinGecko API base URL")
    NATIVE_PRICE_ID: str = Field(default="ethereum", description="Price-index id of the native currency")

    # Node
    RPC_URL: Optional[str] = Field(default=None, description="JSON-RPC node URL for native balances")
    BALANCE_SOURCE: Optional[Literal["rpc", "explorer"]] = Field(
        default=None,
        description="Where native balances come from (defaults to rpc when RPC_URL is set)"
    )

    # Transaction window
    TX_FILTER_MODE: Literal["server", "client"] = Field(default="server", description="Filter the window upstream or locally")
    TX_WINDOW_DAYS: int = Field(default=30, ge=1, description="Trailing transaction window in days")

    HTTP_TIMEOUT: float = Field(default=30.0, gt=0, description="Timeout for each upstream call in seconds")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("ETHERSCAN_API_KEY", "RPC_URL")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty environment values as unset."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def check_balance_source(self) -> "Settings":
        if self.BALANCE_SOURCE == "rpc" and not self.RPC_URL:
            raise ValueError("BALANCE_SOURCE=rpc requires RPC_URL")
        return self

    @property
    def balance_source(self) -> str:
        """Effective native balance strategy."""
        if self.BALANCE_SOURCE:
            return self.BALANCE_SOURCE
        return "rpc" if self.RPC_URL else "explorer"


# Global settings instance
settings = Settings()
