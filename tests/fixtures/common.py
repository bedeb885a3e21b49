"""
Common test fixtures shared by all modules.

Provides factory functions for eligibility records and distributions:
- the three-recipient scenario used across the commitment tests
- generated recipient lists of arbitrary size
- on-disk record files (JSON and CSV)
"""

import csv
import json
from pathlib import Path
from typing import Any, Optional

from airdrop import AirdropDistribution, build_distribution
from core.config import DistributionConfig
from core.schemas.records import EligibilityRecord


ADDR_A = "0x" + "a" * 39 + "1"
ADDR_B = "0x" + "b" * 39 + "2"
ADDR_C = "0x" + "c" * 39 + "3"


def make_scenario_records() -> list[EligibilityRecord]:
    """The A=100, B=50, C=25 recipient list, in that order."""
    return [
        EligibilityRecord(address=ADDR_A, amount=100),
        EligibilityRecord(address=ADDR_B, amount=50),
        EligibilityRecord(address=ADDR_C, amount=25),
    ]


def make_address(i: int) -> str:
    """A deterministic, distinct address for index i."""
    return "0x" + format(i + 1, "040x")


def make_records(count: int, base_amount: int = 1000) -> list[EligibilityRecord]:
    """count distinct recipients with amounts base_amount, base_amount+1, ..."""
    return [
        EligibilityRecord(address=make_address(i), amount=base_amount + i)
        for i in range(count)
    ]


def make_record_dicts(count: int) -> list[dict[str, Any]]:
    """Records as JSON-ready dicts with decimal-string amounts."""
    return [r.to_json_dict() for r in make_records(count)]


def make_distribution(
    records: Optional[list[EligibilityRecord]] = None,
    config: Optional[DistributionConfig] = None,
) -> AirdropDistribution:
    """Build a distribution over records (default: the scenario records)."""
    if records is None:
        records = make_scenario_records()
    return build_distribution(records, config)


def write_records_json(path: Path, records: list[Any]) -> Path:
    """Write records (dicts or EligibilityRecords) as a JSON list."""
    items = [r.to_json_dict() if isinstance(r, EligibilityRecord) else r for r in records]
    path.write_text(json.dumps(items), encoding="utf-8")
    return path


def write_records_csv(path: Path, rows: list[list[str]], header: bool = True) -> Path:
    """Write raw rows as an address,amount CSV file."""
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        if header:
            writer.writerow(["address", "amount"])
        writer.writerows(rows)
    return path
