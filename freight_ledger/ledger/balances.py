"""
Counterparty balances across many loads.

Party (cargo provider) and driver (truck) balance sheets, plus the
dashboard cash position over a set of loads. Each figure is rebuilt from
the per-load snapshots.
"""

from decimal import Decimal
from typing import Callable, Iterable, Optional

from pydantic import BaseModel

from freight_ledger.data.models.money import ZERO, money_sum
from freight_ledger.ledger.cash import CashPosition, cash_position
from freight_ledger.ledger.classifier import PaymentBucket, bucket_for
from freight_ledger.ledger.snapshot import LedgerSnapshot

UNKNOWN_COUNTERPARTY = "unknown"

_PROVIDER_BUCKETS = frozenset({PaymentBucket.PROVIDER_ADVANCE, PaymentBucket.PROVIDER_BALANCE})
_DRIVER_BUCKETS = frozenset({PaymentBucket.DRIVER_ADVANCE, PaymentBucket.DRIVER_BALANCE})


class CounterpartyBalance(BaseModel):
    """Freight owed and settled with one party or truck."""

    counterparty_id: str
    total_freight: Decimal
    total_settled: Decimal
    balance: Decimal
    load_count: int


def _settled(snapshot: LedgerSnapshot, buckets: frozenset) -> Decimal:
    return money_sum(t.amount for t in snapshot.transactions if bucket_for(t.type) in buckets)


def _aggregate(
    snapshots: Iterable[LedgerSnapshot],
    key: Callable[[LedgerSnapshot], Optional[str]],
    freight: Callable[[LedgerSnapshot], Decimal],
    buckets: frozenset,
    include: Callable[[LedgerSnapshot], bool],
) -> list[CounterpartyBalance]:
    totals: dict[str, list] = {}

    for snapshot in snapshots:
        if snapshot.load.is_commission_only or not include(snapshot):
            continue
        counterparty = key(snapshot) or UNKNOWN_COUNTERPARTY
        entry = totals.setdefault(counterparty, [ZERO, ZERO, 0])
        entry[0] += freight(snapshot)
        entry[1] += _settled(snapshot, buckets)
        entry[2] += 1

    return [
        CounterpartyBalance(
            counterparty_id=counterparty,
            total_freight=total_freight,
            total_settled=total_settled,
            balance=total_freight - total_settled,
            load_count=load_count,
        )
        for counterparty, (total_freight, total_settled, load_count) in sorted(totals.items())
    ]


def party_balances(snapshots: Iterable[LedgerSnapshot]) -> list[CounterpartyBalance]:
    """
    Balance owed by each cargo provider.

    Commission-only loads are skipped: their freight never passes through
    the broker.
    """
    return _aggregate(
        snapshots,
        key=lambda s: s.load.provider_id,
        freight=lambda s: s.load.provider_freight,
        buckets=_PROVIDER_BUCKETS,
        include=lambda s: True,
    )


def driver_balances(snapshots: Iterable[LedgerSnapshot]) -> list[CounterpartyBalance]:
    """Balance owed to each truck, over loads that have an assignment."""
    return _aggregate(
        snapshots,
        key=lambda s: s.assignment.truck_id or s.load.truck_id,
        freight=lambda s: s.load.truck_freight_or_zero,
        buckets=_DRIVER_BUCKETS,
        include=lambda s: s.assignment is not None,
    )


def cash_position_across(
    snapshots: Iterable[LedgerSnapshot],
    strict: bool = True,
) -> CashPosition:
    """Cash position by payment method summed over many loads."""
    transactions = []
    expenses = []
    for snapshot in snapshots:
        transactions.extend(snapshot.transactions)
        expenses.extend(snapshot.expenses)
    return cash_position(transactions, expenses, strict=strict)
