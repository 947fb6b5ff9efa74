"""Tests for the settlement calculator."""

from decimal import Decimal

from freight_ledger.data.models import Assignment, Load, PaymentModel
from freight_ledger.ledger.settlement import compute_settlement, paid_charges

from .factories import charge, expense, txn


class TestStandardModel:
    def test_worked_example(self, standard_load, assignment, example_transactions, example_expenses):
        summary = compute_settlement(
            standard_load, assignment, example_transactions, example_expenses, []
        )

        assert summary.payment_model == PaymentModel.STANDARD
        assert summary.truck_assigned
        assert summary.base_profit == Decimal("2000")
        assert summary.advance_from_provider == Decimal("5000")
        assert summary.balance_from_provider == Decimal("5000")
        assert summary.advance_to_driver == Decimal("4000")
        assert summary.balance_to_driver == 0
        assert summary.total_received == Decimal("10000")
        assert summary.balance_to_receive == 0
        assert summary.balance_to_pay == Decimal("4000")
        assert summary.net_profit == Decimal("1800")

    def test_balance_identity(self, standard_load, assignment):
        transactions = [
            txn("advance_from_provider", "3333.33"),
            txn("advance_from_provider", "1111.11", "upi"),
            txn("balance_from_provider", "0.01", "bank_transfer"),
        ]
        summary = compute_settlement(standard_load, assignment, transactions, [], [])
        assert (
            summary.balance_to_receive
            + summary.advance_from_provider
            + summary.balance_from_provider
            == standard_load.provider_freight
        )

    def test_net_profit_includes_paid_charges_only(self, standard_load, assignment):
        charges = [
            charge(500, "party", "paid"),
            charge(200, "supplier", "paid"),
            charge(900, "party", "pending"),
            charge(700, "supplier", "waived"),
        ]
        summary = compute_settlement(standard_load, assignment, [], [expense(300)], charges)

        assert summary.party_charges == Decimal("500")
        assert summary.supplier_charges == Decimal("200")
        # (10000 - 8000) + 800 + 500 - 300 - 200
        assert summary.net_profit == Decimal("2800")

    def test_net_profit_uses_agreed_commission(self, standard_load, assignment):
        summary = compute_settlement(
            standard_load, assignment, [txn("commission", 300, "upi")], [], []
        )
        assert summary.commission_received == Decimal("300")
        assert summary.net_profit == Decimal("2800")

    def test_settled_inflow_and_outflow(self, standard_load, assignment):
        transactions = [
            txn("advance_from_provider", 4000),
            txn("commission", 800, "upi"),
            txn("advance_to_driver", 3000),
        ]
        charges = [charge(100, "party"), charge(50, "supplier")]
        summary = compute_settlement(standard_load, assignment, transactions, [expense(250)], charges)

        assert summary.total_received == Decimal("4000")
        assert summary.settled_inflow == Decimal("4900")
        assert summary.settled_outflow == Decimal("3300")
        # commission income never reduces the freight receivable
        assert summary.balance_to_receive == Decimal("6000")

    def test_over_payment_is_negative_not_clamped(self, standard_load, assignment):
        transactions = [
            txn("advance_from_provider", 6000),
            txn("balance_from_provider", 4500),
            txn("advance_to_driver", 8000),
            txn("balance_to_driver", 250),
        ]
        summary = compute_settlement(standard_load, assignment, transactions, [], [])

        assert summary.balance_to_receive == Decimal("-500")
        assert summary.balance_to_pay == Decimal("-250")
        assert "Provider over-paid by ₹500.00" in summary.notes
        assert "Driver over-paid by ₹250.00" in summary.notes

    def test_without_assignment_driver_figures_are_zero(self):
        load = Load(provider_freight=10000, truck_freight=8000, status="pending")
        transactions = [txn("advance_from_provider", 2000), txn("advance_to_driver", 1000), txn("commission", 300)]
        summary = compute_settlement(load, None, transactions, [], [])

        assert not summary.truck_assigned
        assert not summary.driver_settlement_applicable
        assert summary.truck_freight == 0
        assert summary.advance_to_driver == 0
        assert summary.balance_to_pay == 0
        assert summary.commission_amount == 0
        assert summary.commission_received == 0
        assert summary.balance_to_receive == Decimal("8000")
        assert summary.net_profit == Decimal("10000")
        assert any("No truck assigned" in note for note in summary.notes)

    def test_assignment_without_commission_terms(self, standard_load):
        summary = compute_settlement(standard_load, Assignment(), [], [], [])
        assert summary.truck_assigned
        assert summary.commission_amount == 0
        assert summary.net_profit == Decimal("2000")

    def test_loss_is_noted(self, standard_load, assignment):
        summary = compute_settlement(standard_load, assignment, [], [expense(5000)], [])
        assert summary.net_profit == Decimal("-2200")
        assert "Load is running at a loss of ₹2200.00" in summary.notes

    def test_currency_symbol_in_notes(self, standard_load, assignment):
        summary = compute_settlement(standard_load, assignment, [], [], [], currency_symbol="$")
        assert "Balance to receive from provider: $10000.00" in summary.notes


class TestCommissionOnlyModel:
    def test_commission_figures(self, commission_load, assignment):
        transactions = [txn("commission", 500, "upi")]
        charges = [
            charge(200, "party", "paid"),
            charge(50, "supplier", "paid"),
            charge(300, "party", "pending"),
            charge(70, "supplier", "waived"),
        ]
        summary = compute_settlement(commission_load, assignment, transactions, [expense(100)], charges)

        assert summary.is_commission_only
        assert summary.commission_amount == Decimal("800")
        assert summary.commission_received == Decimal("500")
        assert summary.total_expenses == Decimal("100")
        assert summary.party_charges == Decimal("200")
        assert summary.supplier_charges == Decimal("50")
        assert summary.net_profit == Decimal("550")
        assert summary.balance_to_receive == Decimal("300")
        assert summary.settled_inflow == Decimal("700")
        assert summary.settled_outflow == Decimal("150")

    def test_driver_side_not_applicable(self, commission_load, assignment):
        transactions = [
            txn("advance_from_provider", 5000),
            txn("advance_to_driver", 4000),
            txn("commission", 800),
        ]
        summary = compute_settlement(commission_load, assignment, transactions, [], [])

        assert not summary.driver_settlement_applicable
        assert summary.truck_freight == 0
        assert summary.balance_to_pay == 0
        assert summary.advance_from_provider == 0
        assert summary.advance_to_driver == 0
        assert summary.total_received == 0
        assert summary.balance_to_receive == 0
        assert summary.net_profit == Decimal("800")
        assert any("2 freight transaction(s)" in note for note in summary.notes)

    def test_commission_over_received(self, commission_load, assignment):
        summary = compute_settlement(
            commission_load, assignment, [txn("commission", 1000)], [], []
        )
        assert summary.balance_to_receive == Decimal("-200")
        assert "Commission over-received by ₹200.00" in summary.notes

    def test_without_assignment_commission_is_zero(self, commission_load):
        summary = compute_settlement(
            commission_load, None, [txn("commission", 500)], [expense(40)], [charge(10, "party")]
        )

        assert not summary.truck_assigned
        assert summary.commission_amount == 0
        assert summary.commission_received == 0
        assert summary.balance_to_receive == 0
        assert summary.net_profit == Decimal("-30")
        assert summary.settled_inflow == Decimal("10")
        assert not any("over-received" in note for note in summary.notes)


def test_settlement_is_idempotent(standard_load, assignment, example_transactions, example_expenses):
    charges = [charge(120, "party"), charge(30, "supplier", "pending")]
    first = compute_settlement(standard_load, assignment, example_transactions, example_expenses, charges)
    second = compute_settlement(standard_load, assignment, example_transactions, example_expenses, charges)
    assert first.model_dump() == second.model_dump()
    assert first.model_dump_json() == second.model_dump_json()


def test_accepts_generators(standard_load, assignment, example_transactions, example_expenses):
    summary = compute_settlement(
        standard_load,
        assignment,
        (t for t in example_transactions),
        (e for e in example_expenses),
        iter([]),
    )
    assert summary.net_profit == Decimal("1800")


def test_paid_charges_helper():
    charges = [charge(10, "party"), charge(5, "party", "waived"), charge(7, "supplier")]
    assert paid_charges(charges, "party") == Decimal("10")
    assert paid_charges(charges, "supplier") == Decimal("7")
