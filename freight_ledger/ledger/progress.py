"""
Partial payment progress - how far one payment stage is toward its target.

Each stage can receive any number of installments in any payment method;
progress is always recomputed from the full transaction list.
"""

from decimal import Decimal
from typing import Any, Iterable, Optional

from pydantic import BaseModel

from freight_ledger.data.models.load import Assignment, Load
from freight_ledger.data.models.money import HUNDRED, ZERO, coerce_money, money_sum
from freight_ledger.data.models.records import Transaction, TransactionType


class PaymentProgress(BaseModel):
    """Progress of a single payment stage."""

    stage: TransactionType
    target_amount: Decimal
    total_paid: Decimal
    remaining: Decimal  # negative on over-payment
    percentage: float  # 0-100
    payment_count: int

    @property
    def is_complete(self) -> bool:
        return self.percentage >= 100


def total_paid(transactions: Iterable[Transaction], stage_type: TransactionType) -> Decimal:
    """Sum of all installments recorded against one transaction type."""
    stage_type = TransactionType(stage_type)
    return money_sum(t.amount for t in transactions if t.type == stage_type)


def percentage_of(paid: Decimal, target: Decimal) -> float:
    """
    Percentage of target covered, capped at 100.

    A zero or negative target yields 0 rather than a division error.
    """
    if target <= ZERO:
        return 0.0
    return float(min(HUNDRED, paid / target * HUNDRED))


def progress(
    transactions: Iterable[Transaction],
    stage_type: TransactionType,
    target_amount: Any,
) -> PaymentProgress:
    """
    Compute progress of one payment stage.

    Args:
        transactions: All transactions of the load
        stage_type: Transaction type that makes up the stage
        target_amount: Amount the stage should reach

    Returns:
        PaymentProgress with total paid, remaining and percentage
    """
    stage_type = TransactionType(stage_type)
    target = coerce_money(target_amount)
    payments = [t for t in transactions if t.type == stage_type]
    paid = money_sum(t.amount for t in payments)

    return PaymentProgress(
        stage=stage_type,
        target_amount=target,
        total_paid=paid,
        remaining=target - paid,
        percentage=percentage_of(paid, target),
        payment_count=len(payments),
    )


def stage_target(
    stage_type: TransactionType,
    load: Load,
    assignment: Optional[Assignment],
    transactions: Iterable[Transaction],
) -> Decimal:
    """
    Target amount for a payment stage.

    Advances target the full freight of their side; balances target the
    freight left after that side's advances; commission targets the agreed
    commission. Driver-side and commission targets are zero without an
    assignment.
    """
    stage_type = TransactionType(stage_type)
    provider_freight = load.provider_freight
    truck_freight = load.truck_freight_or_zero if assignment is not None else ZERO

    if stage_type == TransactionType.ADVANCE_FROM_PROVIDER:
        return provider_freight
    if stage_type == TransactionType.ADVANCE_TO_DRIVER:
        return truck_freight
    if stage_type == TransactionType.BALANCE_FROM_PROVIDER:
        advance = total_paid(transactions, TransactionType.ADVANCE_FROM_PROVIDER)
        return max(ZERO, provider_freight - advance)
    if stage_type == TransactionType.BALANCE_TO_DRIVER:
        advance = total_paid(transactions, TransactionType.ADVANCE_TO_DRIVER)
        return max(ZERO, truck_freight - advance)
    # commission
    return assignment.commission_or_zero if assignment is not None else ZERO


def stage_progress(
    stage_type: TransactionType,
    load: Load,
    assignment: Optional[Assignment],
    transactions: Iterable[Transaction],
) -> PaymentProgress:
    """Progress of a stage against its derived target."""
    transactions = list(transactions)
    target = stage_target(stage_type, load, assignment, transactions)
    return progress(transactions, stage_type, target)
