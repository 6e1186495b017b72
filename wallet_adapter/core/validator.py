"""Job request validation."""

import logging
from typing import Any, Optional

import pydantic

from .exceptions import ValidationError
from ..schemas import JobRequest, ValidatedRequest

logger = logging.getLogger(__name__)


def job_id_of(payload: Any) -> Optional[str]:
    if isinstance(payload, dict) and isinstance(payload.get("id"), str):
        return payload["id"]
    return None


def _describe(exc: pydantic.ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    # model validators report "Value error, <msg>"
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return f"{location}: {message}" if location else message


def validate_job_request(payload: Any) -> ValidatedRequest:
    """
    Check that a raw job request carries a string `id` and a wallet address.

    Raises:
        ValidationError: with the request's `id` attached when it is a string.
    """
    job_id = job_id_of(payload)
    if not isinstance(payload, dict):
        raise ValidationError("Job request must be a JSON object", job_id=job_id)

    try:
        request = JobRequest.model_validate(payload)
    except pydantic.ValidationError as e:
        logger.info(f"Rejected job request {job_id}: {e.error_count()} error(s)")
        raise ValidationError(_describe(e), job_id=job_id) from e

    return ValidatedRequest(job_id=request.id, address=request.data.address)
