#!/usr/bin/env python3
"""
Match Finder - filter, score, threshold and rank candidate companies.
"""

import logging
from typing import List, Optional, Sequence

from core.config_loader import MatchingConfig
from core.matching.models import CompanyProfile, MatchedCompany, MatchingFilters, RequestProfile
from core.matching.scoring import calculate_match_score

logger = logging.getLogger(__name__)


def passes_filters(company: CompanyProfile, filters: Optional[MatchingFilters]) -> bool:
    """
    Hard filters, applied before scoring.

    Companies not accepting new projects are always excluded; the
    verification and rating filters only apply when requested.
    """
    if not company.accepts_new_projects:
        return False

    if filters is None:
        return True

    if filters.verified_only and not company.is_verified:
        return False

    if filters.min_rating and company.average_rating < filters.min_rating:
        return False

    return True


def find_matching_companies(
    companies: Sequence[CompanyProfile],
    request: RequestProfile,
    filters: Optional[MatchingFilters] = None,
    config: Optional[MatchingConfig] = None
) -> List[MatchedCompany]:
    """
    Find and rank matching companies for a request.

    Steps:
    1. Hard filters (accepting new projects, verified, min rating)
    2. Score every remaining company
    3. Drop matches below config.min_score
    4. Sort by total descending; equal totals keep their input order
    5. Truncate to config.max_results

    Pure function: the input sequence is not modified.
    """
    cfg = config or MatchingConfig()

    candidates = [c for c in companies if passes_filters(c, filters)]

    scored = [
        MatchedCompany(company=c, match_score=calculate_match_score(c, request, cfg))
        for c in candidates
    ]

    qualified = [m for m in scored if m.match_score.total >= cfg.min_score]

    # sorted() is stable, so ties retain insertion order
    ranked = sorted(qualified, key=lambda m: m.match_score.total, reverse=True)

    logger.debug(
        f"Request {request.id}: {len(companies)} companies, {len(candidates)} after filters, "
        f"{len(qualified)} above min_score={cfg.min_score}"
    )

    return ranked[:cfg.max_results]
