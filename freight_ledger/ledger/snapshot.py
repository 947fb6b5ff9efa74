"""
Ledger snapshot - one consistent view of a load and all of its records.

Raw records are validated here, at ingestion. A malformed record rejects
the whole snapshot; nothing is coerced to zero.
"""

from typing import Any, Iterable, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from freight_ledger.core.exceptions import InvalidRecordError, SnapshotMismatchError
from freight_ledger.data.models.load import Assignment, Load
from freight_ledger.data.models.records import Charge, Expense, LedgerRecord, Transaction

ModelT = TypeVar("ModelT", bound=BaseModel)


class LedgerSnapshot(BaseModel):
    """A load with its assignment and records as of one point in time."""

    model_config = ConfigDict(frozen=True)

    load: Load
    assignment: Optional[Assignment] = None
    transactions: list[Transaction] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    charges: list[Charge] = Field(default_factory=list)

    @classmethod
    def build(
        cls,
        load: Load,
        assignment: Optional[Assignment] = None,
        transactions: Iterable[Transaction] = (),
        expenses: Iterable[Expense] = (),
        charges: Iterable[Charge] = (),
    ) -> "LedgerSnapshot":
        """
        Assemble a snapshot from already-validated models.

        Raises:
            SnapshotMismatchError: If a record names a different load
        """
        snapshot = cls(
            load=load,
            assignment=assignment,
            transactions=list(transactions),
            expenses=list(expenses),
            charges=list(charges),
        )
        snapshot.check_consistency()
        return snapshot

    def check_consistency(self) -> None:
        """
        Every record that names a load must name the same one.

        An anonymous load takes its id from the first record that names one.
        """
        load_id = self.load.load_id

        named: list[tuple[str, Optional[str]]] = []
        if self.assignment is not None:
            named.append(("assignment", self.assignment.load_id))
        groups: list[tuple[str, list[LedgerRecord]]] = [
            ("transaction", self.transactions),
            ("expense", self.expenses),
            ("charge", self.charges),
        ]
        for kind, records in groups:
            named.extend((kind, record.load_id) for record in records)

        for kind, record_load_id in named:
            if record_load_id is None:
                continue
            if load_id is None:
                load_id = record_load_id
            elif record_load_id != load_id:
                raise SnapshotMismatchError(load_id, record_load_id, kind)

    def as_args(self) -> tuple:
        """(load, assignment, transactions, expenses, charges) for the ledger functions."""
        return self.load, self.assignment, self.transactions, self.expenses, self.charges


def _validate_one(model: Type[ModelT], raw: Any, kind: str, index: Optional[int] = None) -> ModelT:
    if isinstance(raw, model):
        return raw
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        reasons = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or kind}: {err['msg']}" for err in e.errors()
        )
        raise InvalidRecordError(kind, reasons, index) from e


def _validate_many(model: Type[ModelT], raws: Optional[Iterable[Any]], kind: str) -> list[ModelT]:
    return [_validate_one(model, raw, kind, i) for i, raw in enumerate(raws or [])]


def ingest(payload: dict[str, Any]) -> LedgerSnapshot:
    """
    Validate a raw payload into a snapshot.

    Args:
        payload: Mapping with "load" and optional "assignment",
            "transactions", "expenses" and "charges" keys

    Returns:
        LedgerSnapshot

    Raises:
        InvalidRecordError: If any record is malformed
        SnapshotMismatchError: If records belong to different loads
    """
    if "load" not in payload or payload["load"] is None:
        raise InvalidRecordError("load", "load is required")

    load = _validate_one(Load, payload["load"], "load")
    raw_assignment = payload.get("assignment")
    assignment = (
        _validate_one(Assignment, raw_assignment, "assignment") if raw_assignment is not None else None
    )

    return LedgerSnapshot.build(
        load=load,
        assignment=assignment,
        transactions=_validate_many(Transaction, payload.get("transactions"), "transaction"),
        expenses=_validate_many(Expense, payload.get("expenses"), "expense"),
        charges=_validate_many(Charge, payload.get("charges"), "charge"),
    )
