"""Shared helpers for explorer-matrix-lib."""

from ex_common.api import ExplorerError, configure_logging

__all__ = ["configure_logging", "ExplorerError"]
