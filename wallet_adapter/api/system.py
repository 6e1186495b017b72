"""System endpoints for health checks and system information."""

from datetime import datetime, timezone
from fastapi import APIRouter

from ..core.config import settings

router = APIRouter(prefix="/system", tags=["System"])


@router.get("/health", summary="Service health check")
async def health_check() -> dict:
    """Check the health and status of the API."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc),
        "version": settings.APP_VERSION,
        "app_name": settings.APP_NAME
    }


@router.get("/info", summary="System information")
async def system_info() -> dict:
    """Get system information and configuration; secrets are only reported as set or unset."""
    return {
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "debug": settings.DEBUG,
        "explorer_url": settings.ETHERSCAN_API_URL,
        "explorer_api_key": "configured" if settings.ETHERSCAN_API_KEY else "not configured",
        "price_url": settings.COINGECKO_API_URL,
        "balance_source": settings.balance_source,
        "rpc_url": "configured" if settings.RPC_URL else "not configured",
        "tx_filter_mode": settings.TX_FILTER_MODE,
        "tx_window_days": settings.TX_WINDOW_DAYS,
        "timestamp": datetime.now(timezone.utc)
    }
