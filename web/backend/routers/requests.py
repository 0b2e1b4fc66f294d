#!/usr/bin/env python3
"""
Request endpoints - request lifecycle.
"""

import logging
from fastapi import APIRouter, Depends

from core.quote_requests.service import RequestService
from ..dependencies import get_request_service, get_acting_user
from ..models.requests import RequestCreate
from ..models.responses import RequestResponse, RequestDetail

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/requests", tags=["requests"])


@router.post("", response_model=RequestResponse, status_code=201)
def create_request(
    body: RequestCreate,
    user_id: str = Depends(get_acting_user),
    service: RequestService = Depends(get_request_service)
):
    """
    Create a draft request owned by the acting user.

    The draft is invisible to matching and proposals until it is published.
    """
    requirements = body.requirements.model_dump(exclude_none=True) if body.requirements else None
    record = service.create_request(
        user_id=user_id,
        title=body.title,
        description=body.description,
        project_type=body.project_type,
        budget_min=body.budget_min,
        budget_max=body.budget_max,
        requirements=requirements,
    )
    return RequestResponse(success=True, request=RequestDetail.from_record(record))


@router.get("/{request_id}", response_model=RequestResponse)
def get_request(
    request_id: str,
    service: RequestService = Depends(get_request_service)
):
    record = service.get_request(request_id)
    return RequestResponse(success=True, request=RequestDetail.from_record(record))


@router.post("/{request_id}/publish", response_model=RequestResponse)
def publish_request(
    request_id: str,
    user_id: str = Depends(get_acting_user),
    service: RequestService = Depends(get_request_service)
):
    """
    Publish a draft request (owner only). Published requests can no
    longer be edited and start receiving matches and proposals.
    """
    record = service.publish_request(request_id, owner_id=user_id)
    return RequestResponse(success=True, request=RequestDetail.from_record(record))
