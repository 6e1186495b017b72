"""Wallet profile external adapter."""

__version__ = "0.1.0"
