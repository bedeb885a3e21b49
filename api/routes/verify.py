"""
Module 05 - Verify Route

Verify a single claim against a published root.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.errors import APIError, InvalidRequestError
from api.models.requests import VerifyRequest
from api.models.responses import VerifyResponse
from core.crypto import hash32_from_hex, to_hex
from core.merkle import leaf_hash, verify_proof
from core.schemas.errors import MerkleDropException


logger = logging.getLogger(__name__)

router = APIRouter(tags=["verification"])


@router.post("/verify", response_model=VerifyResponse)
async def verify_claim(request: VerifyRequest) -> VerifyResponse:
    """
    Rebuild the leaf from (address, amount) and fold the proof into a root.

    A claim that does not verify is a normal 200 response with ok=false;
    only malformed input is a 400.
    """
    try:
        leaf = leaf_hash(request.address, request.amount)
    except MerkleDropException as e:
        raise APIError.from_exception(e) from e

    try:
        root = hash32_from_hex(request.root)
    except ValueError as e:
        raise InvalidRequestError(f"Invalid root: {e}", details={"field_path": "root"}) from e

    siblings = []
    for i, element in enumerate(request.proof):
        try:
            siblings.append(hash32_from_hex(element))
        except ValueError as e:
            raise InvalidRequestError(
                f"Invalid proof element {i}: {e}",
                details={"field_path": f"proof[{i}]"},
            ) from e

    ok = verify_proof(leaf, siblings, root)
    logger.debug("Claim for %s verified=%s", request.address, ok)
    return VerifyResponse(ok=ok, leaf=to_hex(leaf))
