"""API route handlers."""

from api.routes import distributions, health, verify

__all__ = ["distributions", "health", "verify"]
