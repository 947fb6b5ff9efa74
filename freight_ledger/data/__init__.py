"""Data layer: record models consumed by the ledger."""
