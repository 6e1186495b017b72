"""Main FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .core.config import settings
from .core.wallet_profile_service import WalletProfileService
from .api import adapter_router, system_router
from .schemas import JobError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    if not settings.ETHERSCAN_API_KEY:
        logger.warning("ETHERSCAN_API_KEY is not set; explorer calls will be rate limited or rejected")
    logger.info(f"Native balances via {settings.balance_source}, tx window filtered {settings.TX_FILTER_MODE}-side")

    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as client:
        app.state.wallet_profile_service = WalletProfileService.from_settings(settings, client)
        yield

    # Shutdown
    logger.info("HTTP client closed")


app = FastAPI(
    title=settings.APP_NAME,
    description="External adapter returning the value and activity profile of a wallet.",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Anything that escapes a route still answers in the Job Result error shape."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error = JobError(error="Internal server error", status_code=500)
    return JSONResponse(status_code=500, content=error.model_dump(by_alias=True))


# Include API routers
app.include_router(adapter_router)
app.include_router(system_router)


def run() -> None:
    """Console entry point: configure logging and serve with uvicorn."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    # httpx logs full request URLs, query-string API keys included
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logger.info(f"Adapter listening on port {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
