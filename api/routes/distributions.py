"""
Module 05 - Distributions Route

Build the root and proof table for a recipient list.
"""

from __future__ import annotations

import dataclasses
import logging

from fastapi import APIRouter, Depends

from airdrop import build_distribution, parse_records
from api.deps import get_distribution_config
from api.errors import APIError
from api.models.requests import DistributionRequest
from api.models.responses import DistributionResponse
from core.config.runtime import DistributionConfig
from core.schemas.errors import MerkleDropException


logger = logging.getLogger(__name__)

router = APIRouter(tags=["distributions"])


@router.post("/distributions", response_model=DistributionResponse, response_model_by_alias=True)
async def create_distribution(
    request: DistributionRequest,
    config: DistributionConfig = Depends(get_distribution_config),
) -> DistributionResponse:
    """
    Build a distribution.

    Records are committed in the order given. Without skip_invalid the
    first bad record rejects the whole request.
    """
    skip_invalid = (
        config.skip_invalid_records if request.skip_invalid is None else request.skip_invalid
    )
    policy = dataclasses.replace(config, skip_invalid_records=skip_invalid)

    try:
        records = parse_records(request.recipients, skip_invalid=skip_invalid)
        distribution = build_distribution(records, policy)
    except MerkleDropException as e:
        logger.info("Rejected distribution request: %s", e.message)
        raise APIError.from_exception(e) from e

    document = distribution.to_document()
    return DistributionResponse(
        ok=True,
        root=document.root,
        recipients=document.recipients,
        proofs=document.proofs,
        leaf_lookup=document.leaf_lookup,
        recipient_count=distribution.recipient_count,
        token_total=str(distribution.token_total),
    )
