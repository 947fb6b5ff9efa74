"""
Core infrastructure for the freight ledger.

This module provides:
- Config: Configuration management
- Logging: structlog setup
- Exceptions: Ledger error hierarchy
"""

from .config import ConfigManager, LedgerSettings, get_config
from .exceptions import (
    InvalidRecordError,
    InvalidStatusTransitionError,
    LedgerError,
    LedgerInvariantError,
    SnapshotMismatchError,
    UnknownStageError,
)
from .logging import configure_logging

__all__ = [
    "ConfigManager",
    "LedgerSettings",
    "get_config",
    "configure_logging",
    "LedgerError",
    "InvalidRecordError",
    "InvalidStatusTransitionError",
    "UnknownStageError",
    "SnapshotMismatchError",
    "LedgerInvariantError",
]
