"""
Load data model - represents a brokered freight shipment and its truck assignment.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from freight_ledger.core.exceptions import InvalidStatusTransitionError
from freight_ledger.data.models.money import HUNDRED, ZERO, coerce_money


class LoadStatus(str, Enum):
    """Load lifecycle status, in forward order."""

    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    COMPLETED = "completed"

    @property
    def rank(self) -> int:
        """Position in the forward lifecycle."""
        return _STATUS_ORDER.index(self)


_STATUS_ORDER = list(LoadStatus)


class PaymentModel(str, Enum):
    """Who settles the freight legs."""

    STANDARD = "standard"  # broker collects from provider and pays the driver
    COMMISSION_ONLY = "commission_only"  # provider pays the driver directly


class Load(BaseModel):
    """
    Represents a brokered freight load.

    Freight figures are the agreed totals; what has actually been paid
    lives in the transaction records.
    """

    # Identification
    load_id: Optional[str] = Field(None, description="Unique load identifier")
    provider_id: Optional[str] = Field(None, description="Cargo provider (party) identifier")
    truck_id: Optional[str] = Field(None, description="Assigned truck identifier")

    # Status
    status: LoadStatus = Field(LoadStatus.PENDING, description="Current load status")
    payment_model: PaymentModel = Field(PaymentModel.STANDARD, description="Settlement model")
    loading_date: Optional[datetime] = None

    # Route
    loading_location: Optional[str] = None
    unloading_location: Optional[str] = None
    material: Optional[str] = None

    # Financial
    provider_freight: Decimal = Field(..., ge=0, description="Amount owed by the cargo provider")
    truck_freight: Optional[Decimal] = Field(
        None, ge=0, description="Amount owed to the assigned truck, absent until assigned"
    )

    notes: Optional[str] = None

    @field_validator("provider_freight", mode="before")
    @classmethod
    def _validate_provider_freight(cls, value: Any) -> Decimal:
        return coerce_money(value)

    @field_validator("truck_freight", mode="before")
    @classmethod
    def _validate_truck_freight(cls, value: Any) -> Optional[Decimal]:
        if value is None:
            return None
        return coerce_money(value)

    @computed_field
    @property
    def is_commission_only(self) -> bool:
        """True when the provider pays the driver directly."""
        return self.payment_model == PaymentModel.COMMISSION_ONLY

    @computed_field
    @property
    def truck_freight_or_zero(self) -> Decimal:
        """Truck freight with an unassigned load counted as zero."""
        return self.truck_freight if self.truck_freight is not None else ZERO

    def with_status(self, status: LoadStatus) -> "Load":
        """
        Return a copy of this load moved to a later lifecycle status.

        Args:
            status: Target status (same or later than the current one)

        Raises:
            InvalidStatusTransitionError: If the move would go backwards
        """
        status = LoadStatus(status)
        if status.rank < self.status.rank:
            raise InvalidStatusTransitionError(self.status.value, status.value)
        return self.model_copy(update={"status": status})


class Assignment(BaseModel):
    """Binding of a truck to a load, carrying the commission terms."""

    assignment_id: Optional[str] = None
    load_id: Optional[str] = None
    truck_id: Optional[str] = None
    commission_percentage: Optional[Decimal] = Field(None, ge=0)
    commission_amount: Optional[Decimal] = Field(None, ge=0)
    assigned_at: Optional[datetime] = None

    @field_validator("commission_percentage", "commission_amount", mode="before")
    @classmethod
    def _validate_money(cls, value: Any) -> Optional[Decimal]:
        if value is None:
            return None
        return coerce_money(value)

    @computed_field
    @property
    def commission_or_zero(self) -> Decimal:
        """Agreed commission, zero when not yet set."""
        return self.commission_amount if self.commission_amount is not None else ZERO

    @classmethod
    def from_percentage(
        cls,
        truck_freight: Any,
        commission_percentage: Any,
        money_places: int = 2,
        **kwargs: Any,
    ) -> "Assignment":
        """
        Build an assignment whose commission is a percentage of truck freight.

        Args:
            truck_freight: Freight agreed with the truck
            commission_percentage: Commission rate, 0-100
            money_places: Decimal places to round the commission to
            **kwargs: Other Assignment fields (ids, timestamps)

        Returns:
            Assignment with both commission fields set
        """
        freight = coerce_money(truck_freight)
        percentage = coerce_money(commission_percentage)
        quantum = Decimal(1).scaleb(-money_places)
        amount = (freight * percentage / HUNDRED).quantize(quantum, rounding=ROUND_HALF_UP)
        return cls(commission_percentage=percentage, commission_amount=amount, **kwargs)
