"""
Load settlement ledger.

This module contains the ledger components:
- Classifier: Direction and bucket of each transaction type
- Settlement: Financial summary per payment model
- Progress: Partial payment progress per stage
- Workflow: Stage completion and overall progress
- Cash: Cash position by payment method
- Balances: Party and driver balances across loads
"""

from .balances import CounterpartyBalance, cash_position_across, driver_balances, party_balances
from .cash import CashPosition, MethodBalance, cash_balance_by_method, cash_position
from .classifier import (
    FlowDirection,
    PaymentBucket,
    bucket_for,
    classify,
    is_freight_leg,
    is_inflow,
    is_outflow,
)
from .progress import PaymentProgress, progress, stage_progress, stage_target
from .service import LoadLedger, LoadLedgerReport
from .settlement import SettlementSummary, compute_settlement
from .snapshot import LedgerSnapshot, ingest
from .workflow import (
    STAGES,
    StageDescriptor,
    WorkflowStage,
    WorkflowState,
    overall_progress,
    stage_complete,
    workflow_state,
)

__all__ = [
    "FlowDirection",
    "PaymentBucket",
    "classify",
    "bucket_for",
    "is_inflow",
    "is_outflow",
    "is_freight_leg",
    "SettlementSummary",
    "compute_settlement",
    "PaymentProgress",
    "progress",
    "stage_target",
    "stage_progress",
    "STAGES",
    "StageDescriptor",
    "WorkflowStage",
    "WorkflowState",
    "stage_complete",
    "overall_progress",
    "workflow_state",
    "CashPosition",
    "MethodBalance",
    "cash_balance_by_method",
    "cash_position",
    "CounterpartyBalance",
    "party_balances",
    "driver_balances",
    "cash_position_across",
    "LedgerSnapshot",
    "ingest",
    "LoadLedger",
    "LoadLedgerReport",
]
