#!/usr/bin/env python3
"""
Matching Models - Data structures for company/request matching.

Plain dataclasses so the scoring functions can run outside of a
database session. ORM rows are converted by core.matching.dto.
"""

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Any


class ProjectType(str, enum.Enum):
    WEB_DEVELOPMENT = "WEB_DEVELOPMENT"
    MOBILE_APP = "MOBILE_APP"
    AI_ML = "AI_ML"
    SYSTEM_INTEGRATION = "SYSTEM_INTEGRATION"
    CONSULTING = "CONSULTING"
    MAINTENANCE = "MAINTENANCE"
    OTHER = "OTHER"


class BudgetCompatibility(str, enum.Enum):
    PERFECT = "perfect"
    GOOD = "good"
    ACCEPTABLE = "acceptable"
    MISMATCH = "mismatch"


@dataclass
class CompanyProfile:
    """Company data needed for scoring."""
    id: str
    is_verified: bool = False
    accepts_new_projects: bool = True
    average_rating: float = 0.0
    review_count: int = 0
    tech_stacks: List[str] = field(default_factory=list)
    specialties: List[str] = field(default_factory=list)
    name: Optional[str] = None


@dataclass
class RequestProfile:
    """Request data needed for scoring."""
    id: str
    project_type: ProjectType
    budget_min: Optional[int] = None
    budget_max: Optional[int] = None
    tech_stacks: List[str] = field(default_factory=list)
    specialties: List[str] = field(default_factory=list)
    location: Optional[str] = None


@dataclass
class TechStackResult:
    score: int
    matched: List[str] = field(default_factory=list)


@dataclass
class SpecialtyResult:
    score: int
    matched: List[str] = field(default_factory=list)


@dataclass
class BudgetResult:
    score: int
    compatibility: BudgetCompatibility


@dataclass
class MatchScore:
    """Score breakdown for a company/request pair (0-100 total)."""
    total: int
    tech_stack_score: int
    specialty_score: int
    budget_score: int
    rating_score: int
    matched_tech_stacks: List[str] = field(default_factory=list)
    matched_specialties: List[str] = field(default_factory=list)
    budget_compatibility: BudgetCompatibility = BudgetCompatibility.ACCEPTABLE


@dataclass
class MatchedCompany:
    """A candidate company with its score.

    `company` is whatever the caller passed in (profile or ORM row).
    """
    company: Any
    match_score: MatchScore


@dataclass
class MatchingFilters:
    """Hard filters applied before scoring."""
    verified_only: bool = False
    min_rating: Optional[float] = None


@dataclass(frozen=True)
class MatchTier:
    tier: str
    label: str
    color: str
