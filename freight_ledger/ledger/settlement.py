"""
Settlement calculator - financial summary of a single load.

This module:
- Totals every payment leg from the transaction records
- Applies paid charges and trip expenses
- Computes receivable/payable balances and net profit
- Branches on the load's payment model (standard vs commission-only)
"""

from decimal import Decimal
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from freight_ledger.data.models.load import Assignment, Load, PaymentModel
from freight_ledger.data.models.money import ZERO, money_sum
from freight_ledger.data.models.records import (
    Charge,
    ChargeParty,
    Expense,
    Transaction,
    TransactionType,
)
from freight_ledger.ledger.classifier import is_freight_leg
from freight_ledger.ledger.progress import total_paid


class SettlementSummary(BaseModel):
    """Financial position of one load, derived entirely from its records."""

    payment_model: PaymentModel
    truck_assigned: bool
    driver_settlement_applicable: bool

    # Agreed figures
    provider_freight: Decimal
    truck_freight: Decimal
    base_profit: Decimal
    commission_amount: Decimal

    # Payment legs
    advance_from_provider: Decimal
    balance_from_provider: Decimal
    advance_to_driver: Decimal
    balance_to_driver: Decimal
    commission_received: Decimal
    total_received: Decimal
    total_paid_to_driver: Decimal

    # Costs and adjustments
    total_expenses: Decimal
    party_charges: Decimal
    supplier_charges: Decimal

    # Settled totals. Unlike CashPosition these count paid charges and skip
    # legs that do not apply to the load (driver legs when unassigned,
    # freight legs when commission-only).
    settled_inflow: Decimal
    settled_outflow: Decimal

    # Outcome (negative balances mean over-payment)
    balance_to_receive: Decimal
    balance_to_pay: Decimal
    net_profit: Decimal

    notes: list[str] = Field(default_factory=list)

    @property
    def is_commission_only(self) -> bool:
        return self.payment_model == PaymentModel.COMMISSION_ONLY


def paid_charges(charges: Iterable[Charge], charged_to: ChargeParty) -> Decimal:
    """Sum of paid charges levied on one side; pending and waived count as zero."""
    return money_sum(c.amount for c in charges if c.is_settled and c.charged_to == charged_to)


def total_expenses(expenses: Iterable[Expense]) -> Decimal:
    return money_sum(e.amount for e in expenses)


def compute_settlement(
    load: Load,
    assignment: Optional[Assignment],
    transactions: Iterable[Transaction],
    expenses: Iterable[Expense],
    charges: Iterable[Charge],
    currency_symbol: str = "₹",
) -> SettlementSummary:
    """
    Compute the settlement summary for a load.

    Args:
        load: The load being settled
        assignment: Truck assignment, or None if no truck is assigned yet
        transactions: All payment records of the load
        expenses: All trip expenses of the load
        charges: All ad-hoc charges of the load
        currency_symbol: Symbol used in the generated notes

    Returns:
        SettlementSummary for the load's payment model
    """
    transactions = list(transactions)
    expenses = list(expenses)
    charges = list(charges)

    truck_assigned = assignment is not None
    commission_amount = assignment.commission_or_zero if truck_assigned else ZERO
    if truck_assigned:
        commission_received = total_paid(transactions, TransactionType.COMMISSION)
    else:
        commission_received = ZERO
    expense_total = total_expenses(expenses)
    party_charges = paid_charges(charges, ChargeParty.PARTY)
    supplier_charges = paid_charges(charges, ChargeParty.SUPPLIER)

    if load.payment_model == PaymentModel.COMMISSION_ONLY:
        summary = SettlementSummary(
            payment_model=load.payment_model,
            truck_assigned=truck_assigned,
            driver_settlement_applicable=False,
            provider_freight=load.provider_freight,
            truck_freight=ZERO,
            base_profit=ZERO,
            commission_amount=commission_amount,
            advance_from_provider=ZERO,
            balance_from_provider=ZERO,
            advance_to_driver=ZERO,
            balance_to_driver=ZERO,
            commission_received=commission_received,
            total_received=ZERO,
            total_paid_to_driver=ZERO,
            total_expenses=expense_total,
            party_charges=party_charges,
            supplier_charges=supplier_charges,
            settled_inflow=commission_received + party_charges,
            settled_outflow=expense_total + supplier_charges,
            balance_to_receive=commission_amount - commission_received,
            balance_to_pay=ZERO,
            net_profit=commission_received - expense_total - supplier_charges + party_charges,
        )
    else:
        provider_freight = load.provider_freight
        truck_freight = load.truck_freight_or_zero if truck_assigned else ZERO

        advance_from_provider = total_paid(transactions, TransactionType.ADVANCE_FROM_PROVIDER)
        balance_from_provider = total_paid(transactions, TransactionType.BALANCE_FROM_PROVIDER)
        if truck_assigned:
            advance_to_driver = total_paid(transactions, TransactionType.ADVANCE_TO_DRIVER)
            balance_to_driver = total_paid(transactions, TransactionType.BALANCE_TO_DRIVER)
        else:
            advance_to_driver = balance_to_driver = ZERO

        total_received = advance_from_provider + balance_from_provider
        total_paid_to_driver = advance_to_driver + balance_to_driver
        base_profit = provider_freight - truck_freight

        summary = SettlementSummary(
            payment_model=load.payment_model,
            truck_assigned=truck_assigned,
            driver_settlement_applicable=truck_assigned,
            provider_freight=provider_freight,
            truck_freight=truck_freight,
            base_profit=base_profit,
            commission_amount=commission_amount,
            advance_from_provider=advance_from_provider,
            balance_from_provider=balance_from_provider,
            advance_to_driver=advance_to_driver,
            balance_to_driver=balance_to_driver,
            commission_received=commission_received,
            total_received=total_received,
            total_paid_to_driver=total_paid_to_driver,
            total_expenses=expense_total,
            party_charges=party_charges,
            supplier_charges=supplier_charges,
            settled_inflow=total_received + commission_received + party_charges,
            settled_outflow=total_paid_to_driver + expense_total + supplier_charges,
            balance_to_receive=provider_freight - total_received,
            balance_to_pay=truck_freight - total_paid_to_driver,
            net_profit=(
                base_profit + commission_amount + party_charges - expense_total - supplier_charges
            ),
        )

    summary.notes = _generate_settlement_notes(summary, transactions, currency_symbol)
    return summary


def _generate_settlement_notes(
    summary: SettlementSummary,
    transactions: list[Transaction],
    currency_symbol: str,
) -> list[str]:
    """Generate explanatory notes for the settlement."""
    notes = []

    if not summary.truck_assigned:
        notes.append("No truck assigned - driver and commission figures are zero")

    if summary.is_commission_only:
        notes.append("Commission-only load - provider pays the driver directly")
        ignored = [t for t in transactions if is_freight_leg(t.type)]
        if ignored:
            notes.append(
                f"{len(ignored)} freight transaction(s) recorded but not counted under "
                "the commission-only model"
            )
        if summary.balance_to_receive < 0:
            notes.append(
                f"Commission over-received by {currency_symbol}{abs(summary.balance_to_receive):.2f}"
            )
    else:
        if summary.balance_to_receive > 0:
            notes.append(f"Balance to receive from provider: {currency_symbol}{summary.balance_to_receive:.2f}")
        elif summary.balance_to_receive < 0:
            notes.append(f"Provider over-paid by {currency_symbol}{abs(summary.balance_to_receive):.2f}")

        if summary.balance_to_pay > 0:
            notes.append(f"Balance to pay driver: {currency_symbol}{summary.balance_to_pay:.2f}")
        elif summary.balance_to_pay < 0:
            notes.append(f"Driver over-paid by {currency_symbol}{abs(summary.balance_to_pay):.2f}")

    if summary.net_profit < 0:
        notes.append(f"Load is running at a loss of {currency_symbol}{abs(summary.net_profit):.2f}")

    return notes
