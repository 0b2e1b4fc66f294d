#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.

Services are built once in create_app() and stored on app.state; these
helpers hand them to route functions.
"""

from fastapi import Header, Request

from core.config_loader import AppConfig
from core.matching.service import MatchingService
from core.proposals.service import ProposalService
from core.quote_requests.service import RequestService


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_matching_service(request: Request) -> MatchingService:
    return request.app.state.matching_service


def get_proposal_service(request: Request) -> ProposalService:
    return request.app.state.proposal_service


def get_request_service(request: Request) -> RequestService:
    return request.app.state.request_service


def get_acting_user(x_user_id: str = Header(..., alias="X-User-Id")) -> str:
    """
    Identity of the caller, set by the authentication layer in front of
    this service.
    """
    return x_user_id
