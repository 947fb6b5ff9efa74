"""
Pydantic data models for the freight ledger.

Core models:
- Load: Freight shipment and its agreed freight figures
- Assignment: Truck binding with commission terms
- Transaction: Payment on one payment leg
- Expense: Trip cost
- Charge: Ad-hoc adjustment
"""

from .load import Assignment, Load, LoadStatus, PaymentModel
from .records import (
    Charge,
    ChargeParty,
    ChargeStatus,
    Expense,
    LedgerRecord,
    PaymentMethod,
    Transaction,
    TransactionType,
)

__all__ = [
    "Load",
    "LoadStatus",
    "PaymentModel",
    "Assignment",
    "LedgerRecord",
    "Transaction",
    "TransactionType",
    "PaymentMethod",
    "Expense",
    "Charge",
    "ChargeParty",
    "ChargeStatus",
]
