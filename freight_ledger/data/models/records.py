"""
Ledger record models - payments, trip expenses and ad-hoc charges.

Records are immutable once built. Amount validation happens here, at
ingestion, so aggregation code can sum without re-checking.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from freight_ledger.data.models.money import coerce_money


class TransactionType(str, Enum):
    """Payment leg a transaction belongs to."""

    ADVANCE_FROM_PROVIDER = "advance_from_provider"
    BALANCE_FROM_PROVIDER = "balance_from_provider"
    ADVANCE_TO_DRIVER = "advance_to_driver"
    BALANCE_TO_DRIVER = "balance_to_driver"
    COMMISSION = "commission"


class PaymentMethod(str, Enum):
    """Channel a payment moved through."""

    CASH = "cash"
    UPI = "upi"
    BANK_TRANSFER = "bank_transfer"


class ChargeParty(str, Enum):
    """Who an ad-hoc charge is levied on."""

    PARTY = "party"  # cargo provider pays the broker
    SUPPLIER = "supplier"  # broker pays the truck side


class ChargeStatus(str, Enum):
    """Settlement state of a charge."""

    PENDING = "pending"
    PAID = "paid"
    WAIVED = "waived"


class LedgerRecord(BaseModel):
    """Common shape of every ledger record."""

    model_config = ConfigDict(frozen=True)

    record_id: Optional[str] = None
    load_id: Optional[str] = None
    amount: Decimal = Field(..., gt=0, description="Positive amount in ledger currency")
    notes: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _validate_amount(cls, value: Any) -> Decimal:
        return coerce_money(value)


class Transaction(LedgerRecord):
    """A payment event on one of the load's payment legs."""

    type: TransactionType
    payment_method: PaymentMethod
    date: datetime = Field(default_factory=datetime.now)
    payment_details: Optional[str] = None


class Expense(LedgerRecord):
    """A trip cost paid by the broker."""

    payment_method: PaymentMethod
    date: datetime = Field(default_factory=datetime.now)
    expense_type: Optional[str] = None  # "toll", "loading", "misc"


class Charge(LedgerRecord):
    """An ad-hoc adjustment levied on the party or the supplier."""

    charged_to: ChargeParty
    status: ChargeStatus = ChargeStatus.PENDING
    charge_type: Optional[str] = None  # "detention", "damage", ...
    date: Optional[datetime] = None

    @property
    def is_settled(self) -> bool:
        """Only paid charges move money."""
        return self.status == ChargeStatus.PAID
