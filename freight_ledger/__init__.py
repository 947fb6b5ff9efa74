"""Freight brokerage load settlement ledger."""

__version__ = "0.1.0"
