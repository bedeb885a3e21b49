"""
CLI command modules.
"""

from merkledrop_cli.commands import build, check, proof, verify

__all__ = ["build", "check", "proof", "verify"]
