#!/usr/bin/env python3
"""
Request Service - quote request creation and publishing.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from core.exceptions import (
    PermissionDeniedException,
    RequestNotFoundException,
    StateConflictException,
    ValidationException,
)
from core.matching.models import ProjectType
from core.proposals.states import RequestStatus, require_request_transition
from database.database import Database
from database.uow import marketplace_uow

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 5
MIN_DESCRIPTION_LENGTH = 20


@dataclass
class RequestRecord:
    id: str
    user_id: str
    title: str
    description: str
    project_type: ProjectType
    status: RequestStatus
    budget_min: Optional[int] = None
    budget_max: Optional[int] = None
    requirements: Dict[str, Any] = field(default_factory=dict)
    published_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None


def request_to_record(request: Any) -> RequestRecord:
    return RequestRecord(
        id=request.id,
        user_id=request.user_id,
        title=request.title,
        description=request.description,
        project_type=ProjectType(request.project_type),
        status=RequestStatus(request.status),
        budget_min=request.budget_min,
        budget_max=request.budget_max,
        requirements=dict(request.requirements or {}),
        published_at=request.published_at,
        closed_at=request.closed_at,
    )


class RequestService:
    def __init__(self, database: Database, clock: Optional[Callable[[], datetime]] = None):
        self.database = database
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def create_request(
        self,
        user_id: str,
        title: str,
        description: str,
        project_type: ProjectType,
        budget_min: Optional[int] = None,
        budget_max: Optional[int] = None,
        requirements: Optional[Dict[str, Any]] = None
    ) -> RequestRecord:
        """Create a DRAFT request."""
        if budget_min is not None and budget_max is not None and budget_min >= budget_max:
            raise ValidationException("budget_min must be lower than budget_max")

        with marketplace_uow(self.database) as repos:
            request = repos.requests.create_request(
                user_id=user_id,
                title=title,
                description=description,
                project_type=ProjectType(project_type),
                budget_min=budget_min,
                budget_max=budget_max,
                requirements=requirements,
            )
            record = request_to_record(request)

        logger.info(f"Created draft request {record.id}")
        return record

    def get_request(self, request_id: str) -> RequestRecord:
        with marketplace_uow(self.database) as repos:
            request = repos.requests.get_by_id(request_id)
            if request is None:
                raise RequestNotFoundException(f"Request {request_id} not found")
            return request_to_record(request)

    def publish_request(self, request_id: str, owner_id: Optional[str] = None) -> RequestRecord:
        """
        Publish a draft request (DRAFT -> PUBLISHED).

        Once published, a request can receive matches and proposals.

        Raises:
            RequestNotFoundException
            PermissionDeniedException: If owner_id is not the owner.
            StateConflictException: If the request is not a draft.
            ValidationException: If title or description are too short.
        """
        with marketplace_uow(self.database) as repos:
            request = repos.requests.get_by_id(request_id, for_update=True)
            if request is None:
                raise RequestNotFoundException(f"Request {request_id} not found")
            if owner_id is not None and request.user_id != owner_id:
                raise PermissionDeniedException("Only the request owner can publish it")
            require_request_transition(request.status, RequestStatus.PUBLISHED)

            if not request.title or len(request.title) < MIN_TITLE_LENGTH:
                raise ValidationException(f"Title must be at least {MIN_TITLE_LENGTH} characters")
            if not request.description or len(request.description) < MIN_DESCRIPTION_LENGTH:
                raise ValidationException(f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters")

            if repos.requests.publish_if_draft(request_id, self.clock()) != 1:
                raise StateConflictException("Request was modified concurrently")

            record = request_to_record(repos.requests.get_by_id(request_id))

        logger.info(f"Published request {request_id}")
        return record
