"""
Module 03 - Airdrop Distribution

Builds the published root and the per-recipient proof table from a list
of eligibility records, and reads/writes the resulting documents.

Usage:
    from airdrop import build_distribution, save_distribution

    distribution = build_distribution(records)
    create_airdrop(root=distribution.root_hex)        # external collaborator
    save_distribution(distribution, "distribution.json")
"""

from airdrop.distribution import AirdropDistribution, build_distribution
from airdrop.io import (
    DistributionIOError,
    dump_document,
    load_distribution_document,
    load_records,
    load_records_csv,
    load_records_json,
    parse_records,
    save_distribution,
)
from airdrop.validation import validate_document

__all__ = [
    "AirdropDistribution",
    "build_distribution",
    "DistributionIOError",
    "dump_document",
    "load_distribution_document",
    "load_records",
    "load_records_csv",
    "load_records_json",
    "parse_records",
    "save_distribution",
    "validate_document",
]
