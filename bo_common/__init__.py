"""Shared helpers for the back-office table engine."""

from bo_common.api import BOError, ConfigurationError, configure_logging

__all__ = ["BOError", "ConfigurationError", "configure_logging"]
