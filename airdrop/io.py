"""
Module 03 - Airdrop Distribution
File: io.py

Purpose: Load eligibility records and save/load distribution documents.

Record sources:
- JSON: a list of {"address": "0x..", "amount": "<decimal>" | <int>}
- CSV: "address,amount" rows; a header row is optional, blank lines ignored

Whether an invalid record aborts the batch or is skipped is the caller's
choice (skip_invalid). Skipped rows are logged at WARNING.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from core.schemas.distribution import DistributionDocument
from core.schemas.errors import InvalidRecordException, SchemaValidationException
from core.schemas.records import EligibilityRecord, parse_record

from airdrop.distribution import AirdropDistribution


logger = logging.getLogger(__name__)


class DistributionIOError(Exception):
    """Error reading or writing record and distribution files."""
    pass


def parse_records(
    items: Iterable[Any],
    *,
    skip_invalid: bool = False,
) -> list[EligibilityRecord]:
    """
    Validate a sequence of JSON-like records.

    Args:
        items: Mappings with "address" and "amount"
        skip_invalid: Drop invalid records instead of raising

    Raises:
        InvalidRecordException: On the first invalid record when not skipping
    """
    records: list[EligibilityRecord] = []
    for row, item in enumerate(items):
        try:
            records.append(parse_record(item, row=row))
        except InvalidRecordException as e:
            if not skip_invalid:
                raise
            logger.warning("Skipping invalid record at row %d: %s", row, e.message)
    return records


def load_records_json(path: str | Path, *, skip_invalid: bool = False) -> list[EligibilityRecord]:
    """
    Load records from a JSON file holding a list of objects.

    Raises:
        DistributionIOError: If the file is missing or not a JSON list
        InvalidRecordException: On an invalid record when not skipping
    """
    path = Path(path)
    if not path.exists():
        raise DistributionIOError(f"Records file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DistributionIOError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(data, dict) and "recipients" in data:
        data = data["recipients"]
    if not isinstance(data, list):
        raise DistributionIOError(f"Expected a JSON list of records in {path}")

    return parse_records(data, skip_invalid=skip_invalid)


def _is_header(row: list[str]) -> bool:
    return [c.strip().lower() for c in row[:2]] == ["address", "amount"]


def load_records_csv(path: str | Path, *, skip_invalid: bool = False) -> list[EligibilityRecord]:
    """
    Load records from an "address,amount" CSV file.

    Row numbers in errors and warnings are 1-based file line numbers.

    Raises:
        DistributionIOError: If the file is missing
        InvalidRecordException: On an invalid row when not skipping
    """
    path = Path(path)
    if not path.exists():
        raise DistributionIOError(f"Records file not found: {path}")

    records: list[EligibilityRecord] = []
    with open(path, newline="", encoding="utf-8") as f:
        for line_no, row in enumerate(csv.reader(f), start=1):
            if not row or all(not cell.strip() for cell in row):
                continue
            if line_no == 1 and _is_header(row):
                continue
            try:
                if len(row) < 2:
                    raise InvalidRecordException(
                        "Row must have address and amount columns",
                        row=line_no,
                    )
                records.append(
                    parse_record({"address": row[0], "amount": row[1]}, row=line_no)
                )
            except InvalidRecordException as e:
                if not skip_invalid:
                    raise
                logger.warning("Skipping invalid CSV row %d: %s", line_no, e.message)
    return records


def load_records(path: str | Path, *, skip_invalid: bool = False) -> list[EligibilityRecord]:
    """Load records from a .csv or .json file, chosen by extension."""
    path = Path(path)
    if path.suffix.lower() == ".csv":
        return load_records_csv(path, skip_invalid=skip_invalid)
    return load_records_json(path, skip_invalid=skip_invalid)


def dump_document(document: DistributionDocument) -> str:
    """Serialize a document as pretty-printed JSON."""
    return json.dumps(document.to_json_dict(), indent=2)


def save_distribution(
    distribution: AirdropDistribution | DistributionDocument,
    path: str | Path,
) -> Path:
    """
    Write the distribution document to path.

    Returns:
        The path written
    """
    document = (
        distribution.to_document()
        if isinstance(distribution, AirdropDistribution)
        else distribution
    )
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(dump_document(document) + "\n", encoding="utf-8")
    logger.info("Wrote distribution document to %s", out_path)
    return out_path


def load_distribution_document(path: str | Path) -> DistributionDocument:
    """
    Read and schema-check a distribution document.

    Schema checks cover shape and hex formats only. Use
    airdrop.validation.validate_document for cryptographic consistency.

    Raises:
        DistributionIOError: If the file is missing or not JSON
        SchemaValidationException: If the JSON does not match the document schema
    """
    path = Path(path)
    if not path.exists():
        raise DistributionIOError(f"Distribution file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DistributionIOError(f"Invalid JSON in {path}: {e}") from e

    try:
        return DistributionDocument.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field_path = ".".join(str(p) for p in first.get("loc", ()))
        raise SchemaValidationException(
            f"Invalid distribution document {path}: {first.get('msg', 'validation failed')}",
            field_path=field_path or None,
            details={"error_count": e.error_count()},
        ) from e


__all__ = [
    "DistributionIOError",
    "parse_records",
    "load_records_json",
    "load_records_csv",
    "load_records",
    "dump_document",
    "save_distribution",
    "load_distribution_document",
]
