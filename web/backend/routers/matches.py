#!/usr/bin/env python3
"""
Match endpoints - ranked companies for a request.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query

from core.matching.models import MatchingFilters
from core.matching.service import MatchingService
from core.proposals.service import ProposalService
from ..dependencies import get_matching_service, get_proposal_service
from ..models.responses import MatchesResponse, CompanyMatch

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/requests", tags=["matches"])


@router.get("/{request_id}/matches", response_model=MatchesResponse)
def get_matches(
    request_id: str,
    min_score: Optional[int] = Query(default=None, ge=0, le=100, description="Minimum match score"),
    max_results: Optional[int] = Query(default=None, ge=1, le=500, description="Maximum results to return"),
    verified_only: bool = Query(default=False, description="Only verified companies"),
    min_rating: Optional[float] = Query(default=None, ge=0, le=5, description="Minimum company rating"),
    invite: bool = Query(default=False, description="Record PENDING proposals for the returned companies"),
    matching_service: MatchingService = Depends(get_matching_service),
    proposal_service: ProposalService = Depends(get_proposal_service)
):
    """
    Get companies matching a published request, best match first.

    min_score and max_results default to the configured matching policy.
    """
    filters = MatchingFilters(verified_only=verified_only, min_rating=min_rating)
    matches = matching_service.find_matches(
        request_id,
        filters=filters,
        min_score=min_score,
        max_results=max_results
    )

    invited = 0
    if invite and matches:
        invited = len(proposal_service.invite_companies(request_id, [m.company.id for m in matches]))

    return MatchesResponse(
        success=True,
        request_id=request_id,
        total_matches=len(matches),
        matches=[CompanyMatch.from_match(m) for m in matches],
        invited=invited
    )
