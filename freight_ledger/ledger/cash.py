"""
Cash position by payment method.

Every inflow/outflow transaction and every expense is attributed to the
channel it moved through. Charges carry no payment method and are left out.
"""

from decimal import Decimal
from typing import Iterable

from pydantic import BaseModel

from freight_ledger.core.exceptions import LedgerInvariantError
from freight_ledger.data.models.money import money_sum
from freight_ledger.data.models.records import Expense, PaymentMethod, Transaction
from freight_ledger.ledger.classifier import is_inflow, is_outflow


class MethodBalance(BaseModel):
    """Money moved through one payment channel."""

    method: PaymentMethod
    inflow: Decimal
    outflow: Decimal
    balance: Decimal


class CashPosition(BaseModel):
    """Balances of all payment channels."""

    cash: Decimal
    upi: Decimal
    bank_transfer: Decimal
    total: Decimal
    total_inflow: Decimal
    total_outflow: Decimal
    by_method: list[MethodBalance]

    def balance_for(self, method: PaymentMethod) -> Decimal:
        return getattr(self, PaymentMethod(method).value)


def method_inflow(transactions: Iterable[Transaction], method: PaymentMethod) -> Decimal:
    method = PaymentMethod(method)
    return money_sum(
        t.amount for t in transactions if t.payment_method == method and is_inflow(t.type)
    )


def method_outflow(
    transactions: Iterable[Transaction],
    expenses: Iterable[Expense],
    method: PaymentMethod,
) -> Decimal:
    method = PaymentMethod(method)
    paid_out = money_sum(
        t.amount for t in transactions if t.payment_method == method and is_outflow(t.type)
    )
    spent = money_sum(e.amount for e in expenses if e.payment_method == method)
    return paid_out + spent


def cash_balance_by_method(
    transactions: Iterable[Transaction],
    expenses: Iterable[Expense],
    method: PaymentMethod,
) -> Decimal:
    """
    Balance of one payment channel.

    Args:
        transactions: Payment records
        expenses: Trip expenses
        method: Channel to total

    Returns:
        Inflow through the channel minus payouts and expenses through it
    """
    transactions = list(transactions)
    return method_inflow(transactions, method) - method_outflow(transactions, expenses, method)


def cash_position(
    transactions: Iterable[Transaction],
    expenses: Iterable[Expense],
    strict: bool = True,
) -> CashPosition:
    """
    Balances of every payment channel plus their total.

    The total is checked against inflow minus outflow computed without
    splitting by channel.

    Args:
        transactions: Payment records
        expenses: Trip expenses
        strict: Raise when the cross-check fails

    Raises:
        LedgerInvariantError: If strict and the per-channel total disagrees
    """
    transactions = list(transactions)
    expenses = list(expenses)

    by_method = []
    for method in PaymentMethod:
        inflow = method_inflow(transactions, method)
        outflow = method_outflow(transactions, expenses, method)
        by_method.append(
            MethodBalance(method=method, inflow=inflow, outflow=outflow, balance=inflow - outflow)
        )

    total = money_sum(m.balance for m in by_method)
    total_inflow = money_sum(t.amount for t in transactions if is_inflow(t.type))
    total_outflow = money_sum(t.amount for t in transactions if is_outflow(t.type)) + money_sum(
        e.amount for e in expenses
    )

    if strict and total != total_inflow - total_outflow:
        raise LedgerInvariantError("cash_cross_check", total_inflow - total_outflow, total)

    balances = {m.method: m.balance for m in by_method}
    return CashPosition(
        cash=balances[PaymentMethod.CASH],
        upi=balances[PaymentMethod.UPI],
        bank_transfer=balances[PaymentMethod.BANK_TRANSFER],
        total=total,
        total_inflow=total_inflow,
        total_outflow=total_outflow,
        by_method=by_method,
    )
