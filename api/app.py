"""
Module 05 - FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import __version__
from api.deps import get_runtime_config
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    merkledrop_error_handler,
)
from api.routes import distributions, health, verify
from core.schemas.errors import MerkleDropException


# Configure logging from MERKLEDROP_LOG_LEVEL or merkledrop.json logging.level
logging.basicConfig(
    level=getattr(logging, get_runtime_config().logging.level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="merkledrop API",
        description="""
HTTP API for building and verifying airdrop Merkle commitments.

## Endpoints

- **POST /distributions** - Build the root and proof table for a recipient list
- **POST /verify** - Verify one claim against a published root
- **GET /health** - Health check

Leaves are `keccak256(abi.encodePacked(address, uint256))`; interior
nodes hash the sorted pair of their children.
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(MerkleDropException, merkledrop_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    app.include_router(health.router)
    app.include_router(distributions.router)
    app.include_router(verify.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
