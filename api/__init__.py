"""
Module 05 - Minimal API (FastAPI)

HTTP API for building and checking airdrop commitments:
- POST /distributions - Build root and proof table from records
- POST /verify - Verify a single claim against a root
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
