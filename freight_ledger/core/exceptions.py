"""
Ledger exceptions.

Every ledger failure is a local computation failure surfaced synchronously
to the caller; nothing here is retryable.
"""

from typing import Optional


class LedgerError(Exception):
    """Base exception for all ledger errors."""
    pass


class InvalidRecordError(LedgerError, ValueError):
    """Raised when a record fails validation at ingestion."""

    def __init__(self, kind: str, reason: str, index: Optional[int] = None):
        self.kind = kind
        self.index = index
        self.reason = reason
        where = f"{kind}[{index}]" if index is not None else kind
        super().__init__(f"Invalid {where}: {reason}")


class UnknownStageError(LedgerError, KeyError):
    """Raised when a workflow stage key is not defined."""

    def __init__(self, stage_key: str):
        self.stage_key = stage_key
        super().__init__(f"Unknown workflow stage: {stage_key}")

    def __str__(self) -> str:
        return self.args[0]


class SnapshotMismatchError(LedgerError, ValueError):
    """Raised when a record in a snapshot belongs to a different load."""

    def __init__(self, load_id: str, record_load_id: str, kind: str):
        self.load_id = load_id
        self.record_load_id = record_load_id
        self.kind = kind
        super().__init__(
            f"{kind} for load '{record_load_id}' found in snapshot of load '{load_id}'"
        )


class LedgerInvariantError(LedgerError):
    """Raised when derived totals disagree with each other."""

    def __init__(self, invariant: str, expected, actual):
        self.invariant = invariant
        self.expected = expected
        self.actual = actual
        super().__init__(f"Ledger invariant '{invariant}' violated: expected {expected}, got {actual}")


class InvalidStatusTransitionError(LedgerError, ValueError):
    """Raised when a load status change would move the lifecycle backwards."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move load from '{current}' back to '{requested}'")
