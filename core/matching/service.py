#!/usr/bin/env python3
"""
Matching Service - runs the matcher against persisted companies.

Loads a snapshot of candidate companies inside a unit of work, converts
them to profiles and ranks them outside of the session.
"""

import logging
from typing import List, Optional

from core.config_loader import MatchingConfig
from core.exceptions import RequestNotFoundException, StateConflictException
from core.matching.dto import company_to_profile, request_to_profile
from core.matching.finder import find_matching_companies
from core.matching.models import MatchedCompany, MatchingFilters, RequestProfile
from core.proposals.states import RequestStatus
from database.database import Database
from database.uow import marketplace_uow

logger = logging.getLogger(__name__)


class MatchingService:
    def __init__(self, database: Database, config: Optional[MatchingConfig] = None):
        self.database = database
        self.config = config or MatchingConfig()

    def effective_config(self, min_score: Optional[int] = None, max_results: Optional[int] = None) -> MatchingConfig:
        """Per-call overrides on top of the configured defaults."""
        overrides = {}
        if min_score is not None:
            overrides['min_score'] = min_score
        if max_results is not None:
            overrides['max_results'] = max_results
        return self.config.model_copy(update=overrides)

    def find_matches(
        self,
        request_id: str,
        filters: Optional[MatchingFilters] = None,
        min_score: Optional[int] = None,
        max_results: Optional[int] = None
    ) -> List[MatchedCompany]:
        """
        Ranked matches for a published request.

        Raises:
            RequestNotFoundException: If the request does not exist.
            StateConflictException: If the request is not published.
        """
        with marketplace_uow(self.database) as repos:
            request = repos.requests.get_by_id(request_id)
            if request is None:
                raise RequestNotFoundException(f"Request {request_id} not found")
            if request.status != RequestStatus.PUBLISHED:
                raise StateConflictException(
                    "Only published requests can receive matches",
                    current_state=request.status
                )

            request_profile: RequestProfile = request_to_profile(request)
            verified_only = bool(filters and filters.verified_only)
            companies = [company_to_profile(c) for c in repos.companies.get_candidates(verified_only)]

        matches = find_matching_companies(
            companies,
            request_profile,
            filters,
            self.effective_config(min_score, max_results)
        )
        logger.info(f"Found {len(matches)} matches for request {request_id} among {len(companies)} companies")
        return matches
