"""Public API surface for ex_common."""

from ex_common.errors import (
    ConfigurationError,
    ExplorerError,
    InvalidOptionValue,
    MissingIdColumnError,
    ProgramParseError,
    error_to_payload,
)
from ex_common.logging import configure_logging

__all__ = [
    "configure_logging",
    "ConfigurationError",
    "ExplorerError",
    "InvalidOptionValue",
    "MissingIdColumnError",
    "ProgramParseError",
    "error_to_payload",
]
