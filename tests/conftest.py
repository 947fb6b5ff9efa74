"""Shared fixtures for ledger tests."""

from decimal import Decimal

import pytest

from freight_ledger.core.config import ConfigManager, reset_config
from freight_ledger.data.models import Assignment, Expense, Load, Transaction

from .factories import expense, txn


@pytest.fixture
def standard_load() -> Load:
    return Load(
        load_id="LOAD-001",
        provider_id="PARTY-01",
        provider_freight=Decimal("10000"),
        truck_freight=Decimal("8000"),
        payment_model="standard",
        status="in_transit",
    )


@pytest.fixture
def commission_load() -> Load:
    return Load(
        load_id="LOAD-002",
        provider_id="PARTY-02",
        provider_freight=Decimal("10000"),
        truck_freight=Decimal("8000"),
        payment_model="commission_only",
        status="in_transit",
    )


@pytest.fixture
def assignment() -> Assignment:
    return Assignment(
        load_id="LOAD-001",
        truck_id="TRUCK-07",
        commission_percentage=Decimal("10"),
        commission_amount=Decimal("800"),
    )


@pytest.fixture
def example_transactions() -> list[Transaction]:
    return [
        txn("advance_from_provider", 5000, "cash"),
        txn("balance_from_provider", 5000, "upi"),
        txn("advance_to_driver", 4000, "cash"),
    ]


@pytest.fixture
def example_expenses() -> list[Expense]:
    return [expense(1000, "cash")]


@pytest.fixture
def empty_config(tmp_path, monkeypatch) -> ConfigManager:
    """Config manager pointing at a directory with no config.yaml."""
    monkeypatch.delenv("LEDGER_CONFIG_DIR", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_RENDERER", raising=False)
    return ConfigManager(config_dir=tmp_path)


@pytest.fixture(autouse=True)
def _fresh_global_config():
    reset_config()
    yield
    reset_config()
