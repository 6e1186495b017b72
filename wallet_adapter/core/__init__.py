"""Core module for the wallet profile adapter."""

from .config import settings, Settings
from .exceptions import AdapterError, ValidationError, UpstreamError
from .wallet_profile_service import WalletProfileService

__all__ = [
    "settings",
    "Settings",
    "AdapterError",
    "ValidationError",
    "UpstreamError",
    "WalletProfileService"
]
