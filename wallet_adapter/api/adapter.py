"""Job endpoints: the oracle node POSTs job requests here."""

import json
import logging
from typing import Union
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..core.wallet_profile_service import WalletProfileService
from ..schemas import JobError, JobResult, SummaryResult

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Adapter"])


def get_wallet_profile_service(request: Request) -> WalletProfileService:
    """The service built at startup (see `main.lifespan`)."""
    return request.app.state.wallet_profile_service


def _job_response(result: Union[JobResult, SummaryResult, JobError]) -> JSONResponse:
    """Mirror the result's statusCode as the HTTP status."""
    return JSONResponse(
        status_code=result.status_code,
        content=result.model_dump(by_alias=True, mode="json")
    )


async def _read_payload(request: Request):
    body = await request.body()
    return json.loads(body) if body else None


@router.get("/", summary="Liveness check")
async def liveness() -> dict:
    return {"status": "ok"}


@router.post("/", summary="Wallet value and activity profile")
async def create_request(
    request: Request,
    service: WalletProfileService = Depends(get_wallet_profile_service)
) -> JSONResponse:
    """Run a job request and return its Job Result."""
    try:
        payload = await _read_payload(request)
    except ValueError:
        return _job_response(JobError(error="Request body is not valid JSON", status_code=400))

    logger.debug(f"POST data: {payload}")
    return _job_response(await service.create_request(payload))


@router.post("/simple", summary="Simple wallet summary")
async def create_summary(
    request: Request,
    service: WalletProfileService = Depends(get_wallet_profile_service)
) -> JSONResponse:
    """Balance, raw token transfers and recent transactions, unvalued."""
    try:
        payload = await _read_payload(request)
    except ValueError:
        return _job_response(JobError(error="Request body is not valid JSON", status_code=400))

    logger.debug(f"POST data: {payload}")
    return _job_response(await service.create_summary(payload))
