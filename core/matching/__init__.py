#!/usr/bin/env python3
"""
Matching Module - deterministic company/request scoring.

Public API:
- calculate_match_score: score breakdown for a single company
- find_matching_companies: filtered, thresholded, ranked candidates
- get_match_tier: display tier for a score

Modules:
- models.py: Data structures (profiles, MatchScore, filters)
- scoring.py: Sub-score formulas (tech stack, specialty, budget, rating)
- finder.py: Filtering and ranking
- tiers.py: Score tiers
- dto.py: ORM row to profile conversion
"""

from core.matching.models import (
    BudgetCompatibility,
    CompanyProfile,
    MatchedCompany,
    MatchingFilters,
    MatchScore,
    MatchTier,
    ProjectType,
    RequestProfile,
)
from core.matching.scoring import (
    PROJECT_TYPE_KEYWORDS,
    calculate_budget_score,
    calculate_match_score,
    calculate_rating_score,
    calculate_specialty_score,
    calculate_tech_stack_score,
)
from core.matching.finder import find_matching_companies
from core.matching.tiers import get_match_tier

__all__ = [
    'BudgetCompatibility', 'CompanyProfile', 'MatchedCompany', 'MatchingFilters',
    'MatchScore', 'MatchTier', 'ProjectType', 'RequestProfile',
    'PROJECT_TYPE_KEYWORDS', 'calculate_budget_score', 'calculate_match_score',
    'calculate_rating_score', 'calculate_specialty_score', 'calculate_tech_stack_score',
    'find_matching_companies', 'get_match_tier',
]
