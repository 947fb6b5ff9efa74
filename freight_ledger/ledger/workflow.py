"""
Workflow state - completion of every stage of a load, derived on demand.

Stages are independently completable. Nothing here is stored: asking twice
with the same records gives the same answer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional

from pydantic import BaseModel

from freight_ledger.core.exceptions import UnknownStageError
from freight_ledger.data.models.load import Assignment, Load, LoadStatus, PaymentModel
from freight_ledger.data.models.records import Charge, Expense, Transaction, TransactionType
from freight_ledger.ledger.progress import PaymentProgress, stage_progress, stage_target


class WorkflowStage(str, Enum):
    """Stages of a load, in display order."""

    ADVANCE_FROM_PROVIDER = "advance_from_provider"
    ADVANCE_TO_DRIVER = "advance_to_driver"
    EXPENSES = "expenses"
    LOADING = "loading"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CHARGES = "charges"
    BALANCE_FROM_PROVIDER = "balance_from_provider"
    BALANCE_TO_DRIVER = "balance_to_driver"
    COMMISSION = "commission"
    COMPLETED = "completed"


class StageKind(str, Enum):
    PAYMENT = "payment"
    LIFECYCLE = "lifecycle"
    PRESENCE = "presence"


def _all_models(model: PaymentModel) -> bool:
    return True


def _standard_only(model: PaymentModel) -> bool:
    return model == PaymentModel.STANDARD


@dataclass(frozen=True)
class StageDescriptor:
    """
    Definition of one workflow stage.

    Payment stages name the transaction type they track; lifecycle stages
    name the load statuses in which they count as done.
    """

    stage: WorkflowStage
    label: str
    kind: StageKind
    applies_to: Callable[[PaymentModel], bool] = _all_models
    transaction_type: Optional[TransactionType] = None
    done_statuses: frozenset = frozenset()

    def is_applicable(self, payment_model: PaymentModel) -> bool:
        return self.applies_to(PaymentModel(payment_model))


def _reached(status: LoadStatus) -> frozenset:
    """Statuses at or beyond the given one."""
    return frozenset(s for s in LoadStatus if s.rank >= status.rank)


STAGES: tuple[StageDescriptor, ...] = (
    StageDescriptor(
        WorkflowStage.ADVANCE_FROM_PROVIDER,
        "Advance from Provider",
        StageKind.PAYMENT,
        applies_to=_standard_only,
        transaction_type=TransactionType.ADVANCE_FROM_PROVIDER,
    ),
    StageDescriptor(
        WorkflowStage.ADVANCE_TO_DRIVER,
        "Advance to Driver",
        StageKind.PAYMENT,
        applies_to=_standard_only,
        transaction_type=TransactionType.ADVANCE_TO_DRIVER,
    ),
    StageDescriptor(WorkflowStage.EXPENSES, "Trip Expenses", StageKind.PRESENCE),
    StageDescriptor(
        WorkflowStage.LOADING,
        "Loading",
        StageKind.LIFECYCLE,
        done_statuses=_reached(LoadStatus.ASSIGNED),
    ),
    StageDescriptor(
        WorkflowStage.IN_TRANSIT,
        "In Transit",
        StageKind.LIFECYCLE,
        done_statuses=_reached(LoadStatus.IN_TRANSIT),
    ),
    StageDescriptor(
        WorkflowStage.DELIVERED,
        "Unloading Complete",
        StageKind.LIFECYCLE,
        done_statuses=_reached(LoadStatus.DELIVERED),
    ),
    StageDescriptor(WorkflowStage.CHARGES, "Charges", StageKind.PRESENCE),
    StageDescriptor(
        WorkflowStage.BALANCE_FROM_PROVIDER,
        "Balance from Provider",
        StageKind.PAYMENT,
        applies_to=_standard_only,
        transaction_type=TransactionType.BALANCE_FROM_PROVIDER,
    ),
    StageDescriptor(
        WorkflowStage.BALANCE_TO_DRIVER,
        "Balance to Driver",
        StageKind.PAYMENT,
        applies_to=_standard_only,
        transaction_type=TransactionType.BALANCE_TO_DRIVER,
    ),
    StageDescriptor(
        WorkflowStage.COMMISSION,
        "Commission Received",
        StageKind.PAYMENT,
        transaction_type=TransactionType.COMMISSION,
    ),
    StageDescriptor(
        WorkflowStage.COMPLETED,
        "Load Completed",
        StageKind.LIFECYCLE,
        done_statuses=_reached(LoadStatus.COMPLETED),
    ),
)

_STAGE_INDEX = {descriptor.stage: descriptor for descriptor in STAGES}


def get_stage(stage_key: str) -> StageDescriptor:
    """
    Look up a stage descriptor.

    Raises:
        UnknownStageError: If the key names no stage
    """
    try:
        return _STAGE_INDEX[WorkflowStage(stage_key)]
    except ValueError:
        raise UnknownStageError(str(stage_key)) from None


def applicable_stages(payment_model: PaymentModel) -> list[StageDescriptor]:
    return [d for d in STAGES if d.is_applicable(payment_model)]


class StageStatus(BaseModel):
    """Completion of one stage."""

    stage: WorkflowStage
    label: str
    kind: StageKind
    applicable: bool
    complete: bool
    progress: Optional[PaymentProgress] = None


class WorkflowState(BaseModel):
    """Completion of every stage plus overall progress."""

    payment_model: PaymentModel
    stages: list[StageStatus]
    completed_count: int
    applicable_count: int
    overall_progress: float

    def status_of(self, stage_key: str) -> StageStatus:
        stage = get_stage(stage_key).stage
        return next(s for s in self.stages if s.stage == stage)


_ADVANCE_FOR_BALANCE = {
    TransactionType.BALANCE_FROM_PROVIDER: TransactionType.ADVANCE_FROM_PROVIDER,
    TransactionType.BALANCE_TO_DRIVER: TransactionType.ADVANCE_TO_DRIVER,
}


def _covered_by_advance(
    transaction_type: TransactionType,
    stage_payment: PaymentProgress,
    load: Load,
    assignment: Optional[Assignment],
    transactions: list[Transaction],
) -> bool:
    """A balance stage left with nothing to collect because the advance paid the whole freight."""
    advance_type = _ADVANCE_FOR_BALANCE.get(transaction_type)
    if advance_type is None or stage_payment.target_amount > 0:
        return False
    return stage_target(advance_type, load, assignment, transactions) > 0


def _evaluate(
    descriptor: StageDescriptor,
    load: Load,
    assignment: Optional[Assignment],
    transactions: list[Transaction],
    expenses: list[Expense],
    charges: list[Charge],
) -> StageStatus:
    stage_payment: Optional[PaymentProgress] = None

    if descriptor.kind == StageKind.PAYMENT:
        stage_payment = stage_progress(
            descriptor.transaction_type, load, assignment, transactions
        )
        complete = stage_payment.is_complete or _covered_by_advance(
            descriptor.transaction_type, stage_payment, load, assignment, transactions
        )
    elif descriptor.kind == StageKind.LIFECYCLE:
        complete = load.status in descriptor.done_statuses
    elif descriptor.stage == WorkflowStage.EXPENSES:
        complete = len(expenses) > 0
    else:
        complete = len(charges) > 0

    return StageStatus(
        stage=descriptor.stage,
        label=descriptor.label,
        kind=descriptor.kind,
        applicable=descriptor.is_applicable(load.payment_model),
        complete=complete,
        progress=stage_payment,
    )


def stage_complete(
    stage_key: str,
    load: Load,
    assignment: Optional[Assignment],
    transactions: Iterable[Transaction],
    expenses: Iterable[Expense],
    charges: Iterable[Charge],
) -> bool:
    """
    Whether a single stage is complete.

    Payment stages are complete at 100% progress, with one exception: a
    balance stage whose target is zero because the advance on that side
    already covered a positive freight is complete while its progress
    still reads 0%. Lifecycle stages follow the load status, and the
    expenses and charges stages need at least one record.

    Args:
        stage_key: WorkflowStage member or its string value

    Raises:
        UnknownStageError: If the key names no stage
    """
    descriptor = get_stage(stage_key)
    status = _evaluate(
        descriptor, load, assignment, list(transactions), list(expenses), list(charges)
    )
    return status.complete


def workflow_state(
    load: Load,
    assignment: Optional[Assignment],
    transactions: Iterable[Transaction],
    expenses: Iterable[Expense],
    charges: Iterable[Charge],
) -> WorkflowState:
    """
    Evaluate every stage of a load.

    Stages not applicable under the load's payment model are still
    reported but do not count toward overall progress.
    """
    transactions = list(transactions)
    expenses = list(expenses)
    charges = list(charges)

    stages = [
        _evaluate(d, load, assignment, transactions, expenses, charges) for d in STAGES
    ]
    applicable = [s for s in stages if s.applicable]
    completed = [s for s in applicable if s.complete]
    overall = (len(completed) / len(applicable)) * 100 if applicable else 0.0

    return WorkflowState(
        payment_model=load.payment_model,
        stages=stages,
        completed_count=len(completed),
        applicable_count=len(applicable),
        overall_progress=overall,
    )


def overall_progress(
    load: Load,
    assignment: Optional[Assignment],
    transactions: Iterable[Transaction],
    expenses: Iterable[Expense],
    charges: Iterable[Charge],
) -> float:
    """Percentage of applicable stages that are complete."""
    return workflow_state(load, assignment, transactions, expenses, charges).overall_progress
