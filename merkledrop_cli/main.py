"""
Module 04 - CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkledrop_cli build --input recipients.json [--out distribution.json] [--skip-invalid] [--json]
    python -m merkledrop_cli proof --distribution distribution.json --address 0x..
    python -m merkledrop_cli verify --distribution distribution.json --address 0x.. --amount N [--proof 0x.. ...]
    python -m merkledrop_cli check distribution.json [--json]
    python -m merkledrop_cli config --init

Environment Variables:
    MERKLEDROP_REQUIRE_POSITIVE_AMOUNTS    Reject zero amounts (default: false)
    MERKLEDROP_REJECT_DUPLICATE_ADDRESSES  Reject any repeated address (default: false)
    MERKLEDROP_SKIP_INVALID_RECORDS        Skip unparseable records (default: false)
    MERKLEDROP_LOG_LEVEL                   Log level (default: INFO)
    MERKLEDROP_LOG_FILE                    Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from merkledrop_cli import __version__
from merkledrop_cli.commands import build, check, proof, verify
from merkledrop_cli.config import get_default_config_template, load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkledrop",
        description="Build and verify sorted-pair Merkle commitments for token airdrops.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (.json, .yaml or .yml; default: ./merkledrop.json or ~/.config/merkledrop/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build the root and proof table from a recipients file",
        description="Read (address, amount) records from JSON or CSV and build the distribution.",
    )
    build_parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Recipients file (.json list of {address, amount} or .csv address,amount)",
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the distribution document here (default: print it to stdout)",
    )
    build_parser.add_argument(
        "--skip-invalid",
        action="store_true",
        default=False,
        help="Skip invalid records instead of aborting the build",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Print the claim proof for an address",
    )
    proof_parser.add_argument("--distribution", "-d", type=str, required=True, help="Distribution document")
    proof_parser.add_argument("--address", "-a", type=str, required=True, help="Recipient address")
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a claim against a distribution root",
        description="Rebuild the leaf from (address, amount) and check the proof against the root.",
    )
    verify_parser.add_argument("--distribution", "-d", type=str, required=True, help="Distribution document")
    verify_parser.add_argument("--address", "-a", type=str, required=True, help="Claimant address")
    verify_parser.add_argument("--amount", type=str, required=True, help="Claimed amount (decimal)")
    verify_parser.add_argument(
        "--proof",
        nargs="+",
        default=None,
        help="Proof elements (0x hex); defaults to the published proof",
    )
    verify_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- check command ---
    check_parser = subparsers.add_parser(
        "check",
        help="Check a distribution document for internal consistency",
    )
    check_parser.add_argument("distribution_path", type=str, help="Distribution document")
    check_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    check_parser.set_defaults(func=check.check_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="merkledrop.json",
        help="Path for config file (default: merkledrop.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (MERKLEDROP_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config_path = args.config if args.config is not None else Path(args.path)
        config = load_config(config_path)
        print(json.dumps(config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: merkledrop config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.log_level == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
