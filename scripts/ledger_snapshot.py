#!/usr/bin/env python3
"""
Compute the ledger for one or more loads from a snapshot file.

The file (YAML or JSON) holds either a single snapshot:

    load: {...}
    assignment: {...}
    transactions: [...]
    expenses: [...]
    charges: [...]

or a list of them under a "loads" key. Output is JSON on stdout:
a per-load report, plus party/driver balances and the combined cash
position when several loads are given.

Usage:
    python scripts/ledger_snapshot.py path/to/snapshot.yaml
"""

import json
import sys
from pathlib import Path

import structlog
import yaml
from dotenv import load_dotenv

from freight_ledger.core import InvalidRecordError, LedgerError, configure_logging
from freight_ledger.ledger import LoadLedger


def load_payload(path: Path) -> dict:
    """Read a snapshot file; JSON is valid YAML, so one parser covers both."""
    with open(path, "r", encoding="utf-8") as f:
        payload = yaml.safe_load(f)
    if not isinstance(payload, dict):
        raise InvalidRecordError("snapshot", "file must contain a mapping")
    return payload


def main(argv: list[str]) -> int:
    """Run the ledger over a snapshot file."""
    if len(argv) != 2:
        print(__doc__.strip().splitlines()[-1].strip(), file=sys.stderr)
        return 2

    load_dotenv()
    configure_logging()
    logger = structlog.get_logger(component="ledger_snapshot")

    path = Path(argv[1])
    if not path.exists():
        print(f"Snapshot file not found: {path}", file=sys.stderr)
        return 2

    ledger = LoadLedger()

    try:
        payload = load_payload(path)
        raw_snapshots = payload["loads"] if "loads" in payload else [payload]
        snapshots = [ledger.ingest(raw) for raw in raw_snapshots]

        output: dict = {
            "reports": [ledger.report(s).model_dump(mode="json") for s in snapshots],
        }
        if len(snapshots) > 1:
            output["party_balances"] = [
                b.model_dump(mode="json") for b in ledger.party_balances(snapshots)
            ]
            output["driver_balances"] = [
                b.model_dump(mode="json") for b in ledger.driver_balances(snapshots)
            ]
            output["cash_position"] = ledger.dashboard_cash_position(snapshots).model_dump(
                mode="json"
            )
    except LedgerError as e:
        logger.error("ledger_failed", error=str(e), path=str(path))
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
