"""
Load ledger facade.

Wraps the pure ledger functions with:
- Configuration loading (currency, cash cross-check strictness)
- Structured logging of every computation
- Ingestion of raw record payloads

The facade holds no record state; every call recomputes from the
snapshot it is given.
"""

from datetime import datetime
from decimal import Decimal
from time import time
from typing import Any, Iterable, Optional

import structlog
from pydantic import BaseModel

from freight_ledger.core.config import ConfigManager, LedgerSettings, get_config
from freight_ledger.core.exceptions import InvalidRecordError, SnapshotMismatchError
from freight_ledger.data.models.records import PaymentMethod, TransactionType
from freight_ledger.ledger.balances import (
    CounterpartyBalance,
    cash_position_across,
    driver_balances,
    party_balances,
)
from freight_ledger.ledger.cash import CashPosition, cash_balance_by_method, cash_position
from freight_ledger.ledger.progress import PaymentProgress, stage_progress
from freight_ledger.ledger.settlement import SettlementSummary, compute_settlement
from freight_ledger.ledger.snapshot import LedgerSnapshot, ingest
from freight_ledger.ledger.workflow import WorkflowState, stage_complete, workflow_state


class LoadLedgerReport(BaseModel):
    """Everything the ledger derives for one load."""

    load_id: Optional[str]
    generated_at: datetime
    currency: str
    settlement: SettlementSummary
    workflow: WorkflowState
    cash: CashPosition


class LoadLedger:
    """
    Ledger for brokered freight loads.

    Provides:
    - Settlement summaries per payment model
    - Partial payment progress per stage
    - Workflow completion and overall progress
    - Cash position by payment method
    - Party and driver balances across loads
    """

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        logger: Optional[structlog.BoundLogger] = None,
        settings: Optional[LedgerSettings] = None,
    ) -> None:
        """
        Initialize the ledger.

        Args:
            config_manager: Optional config manager (defaults to global instance)
            logger: Optional structured logger
            settings: Explicit ledger settings, overriding the config file
        """
        self.config_manager = config_manager or get_config()
        self.settings = settings or self.config_manager.get_ledger_settings()
        self.logger = logger or structlog.get_logger(component="load_ledger")

    def ingest(self, payload: dict[str, Any]) -> LedgerSnapshot:
        """
        Validate a raw payload into a snapshot.

        Raises:
            InvalidRecordError: If any record is malformed
            SnapshotMismatchError: If records belong to different loads
        """
        try:
            snapshot = ingest(payload)
        except (InvalidRecordError, SnapshotMismatchError) as e:
            self.logger.warning("records_rejected", error=str(e))
            raise

        self.logger.debug(
            "records_ingested",
            load_id=snapshot.load.load_id,
            transactions=len(snapshot.transactions),
            expenses=len(snapshot.expenses),
            charges=len(snapshot.charges),
        )
        return snapshot

    def settle(self, snapshot: LedgerSnapshot) -> SettlementSummary:
        """Compute the settlement summary for a snapshot."""
        start_time = time()
        summary = compute_settlement(*snapshot.as_args(), currency_symbol=self.settings.currency_symbol)
        self.logger.info(
            "settlement_computed",
            load_id=snapshot.load.load_id,
            payment_model=summary.payment_model.value,
            truck_assigned=summary.truck_assigned,
            net_profit=str(summary.net_profit),
            balance_to_receive=str(summary.balance_to_receive),
            balance_to_pay=str(summary.balance_to_pay),
            execution_time=time() - start_time,
        )
        return summary

    def progress_for(self, snapshot: LedgerSnapshot, stage_type: TransactionType) -> PaymentProgress:
        """Progress of one payment stage against its derived target."""
        result = stage_progress(stage_type, snapshot.load, snapshot.assignment, snapshot.transactions)
        self.logger.debug(
            "stage_progress_computed",
            load_id=snapshot.load.load_id,
            stage=result.stage.value,
            percentage=result.percentage,
        )
        return result

    def is_stage_complete(self, snapshot: LedgerSnapshot, stage_key: str) -> bool:
        return stage_complete(stage_key, *snapshot.as_args())

    def workflow(self, snapshot: LedgerSnapshot) -> WorkflowState:
        """Completion of every workflow stage."""
        state = workflow_state(*snapshot.as_args())
        self.logger.info(
            "workflow_evaluated",
            load_id=snapshot.load.load_id,
            completed=state.completed_count,
            applicable=state.applicable_count,
            overall_progress=state.overall_progress,
        )
        return state

    def cash_balance(self, snapshot: LedgerSnapshot, method: PaymentMethod) -> Decimal:
        return cash_balance_by_method(snapshot.transactions, snapshot.expenses, method)

    def cash_position(self, snapshot: LedgerSnapshot) -> CashPosition:
        """Cash position by payment method for one load."""
        return cash_position(
            snapshot.transactions, snapshot.expenses, strict=self.settings.strict_cash_check
        )

    def report(self, snapshot: LedgerSnapshot) -> LoadLedgerReport:
        """Settlement, workflow and cash position of a load in one pass."""
        return LoadLedgerReport(
            load_id=snapshot.load.load_id,
            generated_at=datetime.now(),
            currency=self.settings.currency,
            settlement=self.settle(snapshot),
            workflow=self.workflow(snapshot),
            cash=self.cash_position(snapshot),
        )

    def party_balances(self, snapshots: Iterable[LedgerSnapshot]) -> list[CounterpartyBalance]:
        balances = party_balances(snapshots)
        self.logger.info("party_balances_computed", parties=len(balances))
        return balances

    def driver_balances(self, snapshots: Iterable[LedgerSnapshot]) -> list[CounterpartyBalance]:
        balances = driver_balances(snapshots)
        self.logger.info("driver_balances_computed", drivers=len(balances))
        return balances

    def dashboard_cash_position(self, snapshots: Iterable[LedgerSnapshot]) -> CashPosition:
        """Cash position by payment method across many loads."""
        return cash_position_across(snapshots, strict=self.settings.strict_cash_check)

    def __repr__(self) -> str:
        """String representation of the ledger."""
        return f"{self.__class__.__name__}(currency='{self.settings.currency}')"
