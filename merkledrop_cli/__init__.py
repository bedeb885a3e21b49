"""
Module 04 - merkledrop CLI

Command-line interface for building and verifying airdrop commitments.

Usage:
    python -m merkledrop_cli build --input recipients.json --out distribution.json
    python -m merkledrop_cli proof --distribution distribution.json --address 0x..
    python -m merkledrop_cli verify --distribution distribution.json --address 0x.. --amount 100
    python -m merkledrop_cli check distribution.json
"""

__version__ = "0.1.0"
