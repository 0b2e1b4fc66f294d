#!/usr/bin/env python3
"""
Score Calculations - Company/request compatibility sub-scores.

Total score: 0-100 points, built from
- Tech stack compatibility (0-40)
- Specialty alignment (0-30)
- Budget compatibility (0-20)
- Company rating (0-10)

All functions are pure and safe to call concurrently.
"""

import math
import logging
from types import MappingProxyType
from typing import List, Optional, Sequence

from core.config_loader import MatchingConfig
from core.matching.models import (
    BudgetCompatibility,
    BudgetResult,
    CompanyProfile,
    MatchScore,
    ProjectType,
    RequestProfile,
    SpecialtyResult,
    TechStackResult,
)

logger = logging.getLogger(__name__)

TECH_STACK_MAX = 40
SPECIALTY_MAX = 30
PROJECT_TYPE_POINTS = 15
REQUESTED_SPECIALTY_POINTS = 15
UNSPECIFIED_SPECIALTY_CREDIT = 10
NEUTRAL_BUDGET_SCORE = 15
NEUTRAL_RATING_SCORE = 5
RATING_MAX = 10

SMALL_BUDGET_MIDPOINT = 100_000
LARGE_BUDGET_MIDPOINT = 10_000_000

PROJECT_TYPE_KEYWORDS = MappingProxyType({
    ProjectType.WEB_DEVELOPMENT: ('web development', 'frontend', 'backend', 'fullstack'),
    ProjectType.MOBILE_APP: ('mobile development', 'ios', 'android', 'mobile app'),
    ProjectType.AI_ML: ('ai', 'machine learning', 'deep learning', 'data science'),
    ProjectType.SYSTEM_INTEGRATION: ('system integration', 'api integration', 'enterprise'),
    ProjectType.CONSULTING: ('consulting', 'strategy', 'advisory'),
    ProjectType.MAINTENANCE: ('maintenance', 'support', 'bug fixing'),
    ProjectType.OTHER: (),
})

# (minimum review count, bonus points), checked top-down
REVIEW_VOLUME_BONUS = (
    (50, 2.0),
    (20, 1.5),
    (10, 1.0),
    (5, 0.5),
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def calculate_tech_stack_score(
    company_tech_stacks: Sequence[str],
    requested_tech_stacks: Optional[Sequence[str]]
) -> TechStackResult:
    """
    Calculate tech stack score (0-40) from the Jaccard similarity of
    the lowercased company and requested sets.

    Matched names keep the casing used in the request.
    """
    if not requested_tech_stacks:
        return TechStackResult(score=TECH_STACK_MAX, matched=[])

    if not company_tech_stacks:
        return TechStackResult(score=0, matched=[])

    company_set = {t.lower() for t in company_tech_stacks}
    request_set = {t.lower() for t in requested_tech_stacks}

    matched = []
    seen = set()
    for tech in requested_tech_stacks:
        key = tech.lower()
        if key in company_set and key not in seen:
            matched.append(tech)
            seen.add(key)

    union = company_set | request_set
    similarity = len(seen) / len(union)

    return TechStackResult(score=round_half_up(similarity * TECH_STACK_MAX), matched=matched)


def calculate_specialty_score(
    company_specialties: Sequence[str],
    project_type: ProjectType,
    requested_specialties: Optional[Sequence[str]] = None
) -> SpecialtyResult:
    """
    Calculate specialty score (0-30).

    Primary channel (15): a company specialty contains one of the
    project type's keywords. Only the first matching keyword is recorded.

    Secondary channel (15): share of requested specialties that
    substring-match a company specialty in either direction. Without
    requested specialties a flat 10 points is awarded instead.
    """
    if not company_specialties:
        return SpecialtyResult(score=0, matched=[])

    company_set = {s.lower() for s in company_specialties}
    matched: List[str] = []
    score = 0

    for keyword in PROJECT_TYPE_KEYWORDS.get(ProjectType(project_type), ()):
        if any(keyword in spec for spec in company_set):
            matched.append(keyword)
            score += PROJECT_TYPE_POINTS
            break

    if requested_specialties:
        hits = 0
        for spec in dict.fromkeys(s.lower() for s in requested_specialties):
            if any(cs in spec or spec in cs for cs in company_set):
                matched.append(spec)
                hits += 1
        score += round_half_up(hits / len(requested_specialties) * REQUESTED_SPECIALTY_POINTS)
    else:
        score += UNSPECIFIED_SPECIALTY_CREDIT

    return SpecialtyResult(score=min(score, SPECIALTY_MAX), matched=matched)


def calculate_budget_score(
    budget_min: Optional[int] = None,
    budget_max: Optional[int] = None
) -> BudgetResult:
    """
    Calculate budget score (0-20) from the width of the budget range
    relative to its midpoint, with a small/large project adjustment.

    The tier adjustment never changes the compatibility label.
    """
    if not budget_min or not budget_max:
        return BudgetResult(score=NEUTRAL_BUDGET_SCORE, compatibility=BudgetCompatibility.ACCEPTABLE)

    midpoint = (budget_min + budget_max) / 2
    range_ratio = (budget_max - budget_min) / midpoint

    if range_ratio < 0.2:
        # Narrow ranges are harder to satisfy
        score, compatibility = 12, BudgetCompatibility.GOOD
    elif range_ratio < 0.5:
        score, compatibility = 18, BudgetCompatibility.PERFECT
    elif range_ratio < 1.0:
        score, compatibility = 15, BudgetCompatibility.GOOD
    else:
        score, compatibility = 10, BudgetCompatibility.ACCEPTABLE

    if midpoint < SMALL_BUDGET_MIDPOINT:
        score = max(score - 2, 8)
    elif midpoint > LARGE_BUDGET_MIDPOINT:
        score = min(score + 2, 20)

    return BudgetResult(score=score, compatibility=compatibility)


def calculate_rating_score(average_rating: float, review_count: int) -> int:
    """
    Calculate rating score (0-10).

    Unreviewed companies get a neutral 5. Otherwise the rating maps to
    0-8 points plus up to 2 points for review volume.
    """
    if review_count == 0:
        return NEUTRAL_RATING_SCORE

    score = (float(average_rating) / 5) * 8

    for min_reviews, bonus in REVIEW_VOLUME_BONUS:
        if review_count >= min_reviews:
            score += bonus
            break

    return min(round_half_up(score), RATING_MAX)


def calculate_match_score(
    company: CompanyProfile,
    request: RequestProfile,
    config: Optional[MatchingConfig] = None
) -> MatchScore:
    """
    Calculate the complete match score for one company.

    `config` is accepted for API symmetry with find_matching_companies;
    its weights do not influence the fixed sub-score maxima.
    """
    tech = calculate_tech_stack_score(company.tech_stacks, request.tech_stacks)
    specialty = calculate_specialty_score(
        company.specialties,
        request.project_type,
        request.specialties
    )
    budget = calculate_budget_score(request.budget_min, request.budget_max)
    rating = calculate_rating_score(company.average_rating, company.review_count)

    total = round_half_up(tech.score + specialty.score + budget.score + rating)

    return MatchScore(
        total=total,
        tech_stack_score=tech.score,
        specialty_score=specialty.score,
        budget_score=budget.score,
        rating_score=rating,
        matched_tech_stacks=tech.matched,
        matched_specialties=specialty.matched,
        budget_compatibility=budget.compatibility
    )
