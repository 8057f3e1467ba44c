"""Public API surface for bo_common."""

from bo_common.errors import (
    BOError,
    ConfigurationError,
    DataSourceError,
    PreferenceStoreError,
    RenderFault,
)
from bo_common.logging import configure_logging

__all__ = [
    "BOError",
    "ConfigurationError",
    "DataSourceError",
    "PreferenceStoreError",
    "RenderFault",
    "configure_logging",
]
