"""Retryable resource setup."""

from .options import SetupOptions
from .retryable_setup import RetryableSetup

__all__ = ["RetryableSetup", "SetupOptions"]
