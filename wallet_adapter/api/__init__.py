"""API routes module."""

from .adapter import router as adapter_router
from .system import router as system_router

__all__ = [
    "adapter_router",
    "system_router"
]
