"""
Record classifier - direction and bucket of every transaction type.

This table is the only place a transaction type is mapped to money
direction. Settlement, progress and cash aggregation all read it.
"""

from enum import Enum
from typing import NamedTuple

from freight_ledger.data.models.records import TransactionType


class FlowDirection(str, Enum):
    """Direction of money relative to the broker."""

    INFLOW = "inflow"
    OUTFLOW = "outflow"


class PaymentBucket(str, Enum):
    """Financial bucket a transaction type settles."""

    PROVIDER_ADVANCE = "provider_advance"
    PROVIDER_BALANCE = "provider_balance"
    DRIVER_ADVANCE = "driver_advance"
    DRIVER_BALANCE = "driver_balance"
    COMMISSION = "commission"


class Classification(NamedTuple):
    direction: FlowDirection
    bucket: PaymentBucket


_CLASSIFICATION: dict[TransactionType, Classification] = {
    TransactionType.ADVANCE_FROM_PROVIDER: Classification(
        FlowDirection.INFLOW, PaymentBucket.PROVIDER_ADVANCE
    ),
    TransactionType.BALANCE_FROM_PROVIDER: Classification(
        FlowDirection.INFLOW, PaymentBucket.PROVIDER_BALANCE
    ),
    TransactionType.ADVANCE_TO_DRIVER: Classification(
        FlowDirection.OUTFLOW, PaymentBucket.DRIVER_ADVANCE
    ),
    TransactionType.BALANCE_TO_DRIVER: Classification(
        FlowDirection.OUTFLOW, PaymentBucket.DRIVER_BALANCE
    ),
    TransactionType.COMMISSION: Classification(
        FlowDirection.INFLOW, PaymentBucket.COMMISSION
    ),
}

# Buckets that only exist when the broker settles freight itself.
FREIGHT_BUCKETS = frozenset(
    {
        PaymentBucket.PROVIDER_ADVANCE,
        PaymentBucket.PROVIDER_BALANCE,
        PaymentBucket.DRIVER_ADVANCE,
        PaymentBucket.DRIVER_BALANCE,
    }
)


def classify(transaction_type: TransactionType) -> Classification:
    """
    Classify a transaction type.

    Args:
        transaction_type: Enum member or its string value

    Returns:
        (direction, bucket) pair

    Raises:
        ValueError: If the value is not a known transaction type
    """
    return _CLASSIFICATION[TransactionType(transaction_type)]


def direction_of(transaction_type: TransactionType) -> FlowDirection:
    return classify(transaction_type).direction


def bucket_for(transaction_type: TransactionType) -> PaymentBucket:
    return classify(transaction_type).bucket


def is_inflow(transaction_type: TransactionType) -> bool:
    """Money received by the broker (provider payments and commission)."""
    return direction_of(transaction_type) == FlowDirection.INFLOW


def is_outflow(transaction_type: TransactionType) -> bool:
    """Money paid out by the broker to the driver."""
    return direction_of(transaction_type) == FlowDirection.OUTFLOW


def is_freight_leg(transaction_type: TransactionType) -> bool:
    """True for the four provider/driver advance and balance types."""
    return bucket_for(transaction_type) in FREIGHT_BUCKETS
