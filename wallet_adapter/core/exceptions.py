"""Adapter exceptions and the status codes they map to."""

from typing import Optional


class AdapterError(Exception):
    """Base class for errors that end a job run."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AdapterError):
    """The job request is missing a field or carries one of the wrong type."""

    status_code = 400

    def __init__(self, message: str, job_id: Optional[str] = None):
        super().__init__(message)
        self.job_id = job_id


class UpstreamError(AdapterError):
    """An explorer, node or price-index call failed or reported non-success."""

    def __init__(self, message: str, source: str = "upstream"):
        super().__init__(message)
        self.source = source
