"""Tests for cash position by payment method."""

from decimal import Decimal

import pytest

from freight_ledger.core.exceptions import LedgerInvariantError
from freight_ledger.data.models import PaymentMethod
from freight_ledger.data.models.money import ZERO
from freight_ledger.ledger import cash as cash_module
from freight_ledger.ledger.cash import cash_balance_by_method, cash_position

from .factories import expense, txn


def test_worked_example(example_transactions, example_expenses):
    assert cash_balance_by_method(example_transactions, example_expenses, "cash") == 0
    assert cash_balance_by_method(example_transactions, example_expenses, "upi") == Decimal("5000")
    assert cash_balance_by_method(example_transactions, example_expenses, "bank_transfer") == 0


def test_commission_is_inflow_and_expenses_are_outflow():
    transactions = [txn("commission", 800, "bank_transfer"), txn("balance_to_driver", 300, "bank_transfer")]
    expenses = [expense(150, "bank_transfer"), expense(99, "cash")]

    assert cash_balance_by_method(transactions, expenses, PaymentMethod.BANK_TRANSFER) == Decimal("350")
    assert cash_balance_by_method(transactions, expenses, PaymentMethod.CASH) == Decimal("-99")


def test_position_totals(example_transactions, example_expenses):
    position = cash_position(example_transactions, example_expenses)

    assert position.cash == 0
    assert position.upi == Decimal("5000")
    assert position.bank_transfer == 0
    assert position.total == Decimal("5000")
    assert position.total_inflow == Decimal("10000")
    assert position.total_outflow == Decimal("5000")
    assert position.balance_for("upi") == Decimal("5000")
    assert [m.method for m in position.by_method] == list(PaymentMethod)


RECORD_SETS = [
    ([], []),
    ([txn("advance_from_provider", "0.10", "upi")], [expense("0.20", "cash")]),
    (
        [
            txn("advance_from_provider", "1234.56", "cash"),
            txn("balance_from_provider", "765.44", "bank_transfer"),
            txn("advance_to_driver", "999.99", "upi"),
            txn("balance_to_driver", "0.01", "cash"),
            txn("commission", "250", "upi"),
        ],
        [expense("12.5", "cash"), expense("7.25", "bank_transfer"), expense("3", "upi")],
    ),
    ([txn("advance_to_driver", 4000, "cash")] * 5, [expense(1, "upi")] * 7),
]


@pytest.mark.parametrize("transactions,expenses", RECORD_SETS)
def test_cross_check_holds(transactions, expenses):
    position = cash_position(transactions, expenses)
    per_method = sum(
        (cash_balance_by_method(transactions, expenses, m) for m in PaymentMethod), ZERO
    )
    assert per_method == position.total == position.total_inflow - position.total_outflow


def test_cross_check_failure_raises(monkeypatch, example_transactions, example_expenses):
    monkeypatch.setattr(cash_module, "method_outflow", lambda *args: ZERO)
    with pytest.raises(LedgerInvariantError) as exc_info:
        cash_position(example_transactions, example_expenses)
    assert exc_info.value.invariant == "cash_cross_check"


def test_cross_check_can_be_relaxed(monkeypatch, example_transactions, example_expenses):
    monkeypatch.setattr(cash_module, "method_outflow", lambda *args: ZERO)
    position = cash_position(example_transactions, example_expenses, strict=False)
    assert position.total == Decimal("10000")
