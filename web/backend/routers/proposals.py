#!/usr/bin/env python3
"""
Proposal endpoints - submission, selection, rejection and comparison.
"""

import logging
from fastapi import APIRouter, Depends

from core.config_loader import AppConfig
from core.exceptions import ValidationException
from core.proposals.service import ProposalService
from ..dependencies import get_config, get_proposal_service, get_acting_user
from ..models.requests import ProposalSubmission
from ..models.responses import (
    ComparisonMetricsResponse,
    ComparisonResponse,
    ProposalDetail,
    ProposalResponse,
    ProposalsResponse,
    SelectionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["proposals"])


@router.get("/api/requests/{request_id}/proposals", response_model=ProposalsResponse)
def list_proposals(
    request_id: str,
    user_id: str = Depends(get_acting_user),
    service: ProposalService = Depends(get_proposal_service)
):
    """
    Get all submitted proposals for a request (request owner only).

    Selected proposal first, then by most recent response. Each proposal
    carries a live match score.
    """
    records = service.list_request_proposals(request_id, owner_id=user_id)
    return ProposalsResponse(
        success=True,
        request_id=request_id,
        total_proposals=len(records),
        proposals=[ProposalDetail.from_record(r) for r in records]
    )


@router.get("/api/requests/{request_id}/proposals/compare", response_model=ComparisonResponse)
def compare_proposals(
    request_id: str,
    user_id: str = Depends(get_acting_user),
    service: ProposalService = Depends(get_proposal_service)
):
    """Side-by-side proposal comparison with cost and score aggregates."""
    records, metrics = service.compare_request_proposals(request_id, owner_id=user_id)
    return ComparisonResponse(
        success=True,
        request_id=request_id,
        proposals=[ProposalDetail.from_record(r) for r in records],
        comparison_metrics=ComparisonMetricsResponse.from_metrics(metrics)
    )


@router.post("/api/requests/{request_id}/proposals", response_model=ProposalResponse, status_code=201)
def submit_proposal(
    request_id: str,
    submission: ProposalSubmission,
    config: AppConfig = Depends(get_config),
    service: ProposalService = Depends(get_proposal_service)
):
    """
    Submit (or update a pending/responded) proposal for a request.
    """
    min_length = config.proposals.min_proposal_length
    if len(submission.proposal) < min_length:
        raise ValidationException(f"Proposal must be at least {min_length} characters")

    record = service.submit_proposal(
        request_id=request_id,
        company_id=submission.company_id,
        estimated_cost=submission.estimated_cost,
        estimated_duration=submission.estimated_duration,
        proposal=submission.proposal,
        attachments=[str(url) for url in submission.attachments]
    )
    return ProposalResponse(
        success=True,
        message="Proposal submitted successfully",
        proposal=ProposalDetail.from_record(record)
    )


@router.get("/api/proposals/{proposal_id}", response_model=ProposalResponse)
def get_proposal(
    proposal_id: str,
    user_id: str = Depends(get_acting_user),
    service: ProposalService = Depends(get_proposal_service)
):
    """Get proposal details with its live match score (request owner only)."""
    record = service.get_proposal(proposal_id, owner_id=user_id)
    return ProposalResponse(success=True, proposal=ProposalDetail.from_record(record))


@router.post("/api/proposals/{proposal_id}/select", response_model=SelectionResponse)
def select_proposal(
    proposal_id: str,
    user_id: str = Depends(get_acting_user),
    service: ProposalService = Depends(get_proposal_service)
):
    """
    Select a proposal (request owner only).

    All other open proposals for the request are rejected and the
    request is closed in the same transaction.
    """
    result = service.select_proposal(proposal_id, owner_id=user_id)
    return SelectionResponse(
        success=True,
        message="Proposal selected successfully",
        proposal=ProposalDetail.from_record(result.proposal),
        rejected_count=result.rejected_count
    )


@router.post("/api/proposals/{proposal_id}/reject", response_model=ProposalResponse)
def reject_proposal(
    proposal_id: str,
    user_id: str = Depends(get_acting_user),
    service: ProposalService = Depends(get_proposal_service)
):
    """Reject a single responded proposal (request owner only)."""
    record = service.reject_proposal(proposal_id, owner_id=user_id)
    return ProposalResponse(
        success=True,
        message="Proposal rejected",
        proposal=ProposalDetail.from_record(record)
    )
