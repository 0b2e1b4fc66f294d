#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from core.matching.models import MatchScore, MatchedCompany
from core.matching.tiers import get_match_tier
from core.proposals.comparison import ComparisonMetrics
from core.proposals.dto import ProposalRecord
from core.quote_requests.service import RequestRecord
from ..utils import safe_datetime_iso, enum_value


class MatchTierResponse(BaseModel):
    tier: str
    label: str
    color: str


class MatchScoreResponse(BaseModel):
    """Score breakdown of a company/request pair."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "total": 57,
                "tech_stack_score": 13,
                "specialty_score": 25,
                "budget_score": 10,
                "rating_score": 9,
                "matched_tech_stacks": ["react"],
                "matched_specialties": ["web development"],
                "budget_compatibility": "acceptable",
                "tier": {"tier": "fair", "label": "Fair Match", "color": "yellow"}
            }
        }
    )

    total: int = Field(ge=0, le=100)
    tech_stack_score: int = Field(ge=0, le=40)
    specialty_score: int = Field(ge=0, le=30)
    budget_score: int = Field(ge=0, le=20)
    rating_score: int = Field(ge=0, le=10)
    matched_tech_stacks: List[str]
    matched_specialties: List[str]
    budget_compatibility: str
    tier: MatchTierResponse

    @classmethod
    def from_score(cls, score: MatchScore) -> "MatchScoreResponse":
        tier = get_match_tier(score.total)
        return cls(
            total=score.total,
            tech_stack_score=score.tech_stack_score,
            specialty_score=score.specialty_score,
            budget_score=score.budget_score,
            rating_score=score.rating_score,
            matched_tech_stacks=score.matched_tech_stacks,
            matched_specialties=score.matched_specialties,
            budget_compatibility=enum_value(score.budget_compatibility),
            tier=MatchTierResponse(tier=tier.tier, label=tier.label, color=tier.color),
        )


class CompanySummary(BaseModel):
    id: str
    name: Optional[str]
    is_verified: bool
    average_rating: float
    review_count: int
    tech_stacks: List[str]
    specialties: List[str]


class CompanyMatch(BaseModel):
    company: CompanySummary
    match_score: MatchScoreResponse

    @classmethod
    def from_match(cls, match: MatchedCompany) -> "CompanyMatch":
        c = match.company
        return cls(
            company=CompanySummary(
                id=c.id,
                name=c.name,
                is_verified=c.is_verified,
                average_rating=c.average_rating,
                review_count=c.review_count,
                tech_stacks=c.tech_stacks,
                specialties=c.specialties,
            ),
            match_score=MatchScoreResponse.from_score(match.match_score),
        )


class MatchesResponse(BaseModel):
    """Response containing ranked company matches."""
    success: bool
    request_id: str
    total_matches: int
    matches: List[CompanyMatch]
    invited: int = 0


class ProposalDetail(BaseModel):
    id: str
    request_id: str
    company_id: str
    company_name: Optional[str]
    status: str
    estimated_cost: Optional[int]
    estimated_duration: Optional[str]
    proposal: Optional[str]
    attachments: List[str]
    responded_at: Optional[str]
    selected_at: Optional[str]
    created_at: Optional[str]
    updated_at: Optional[str]
    match_score: Optional[MatchScoreResponse] = None

    @classmethod
    def from_record(cls, record: ProposalRecord) -> "ProposalDetail":
        return cls(
            id=record.id,
            request_id=record.request_id,
            company_id=record.company_id,
            company_name=record.company_name,
            status=enum_value(record.status),
            estimated_cost=record.estimated_cost,
            estimated_duration=record.estimated_duration,
            proposal=record.proposal,
            attachments=record.attachments,
            responded_at=safe_datetime_iso(record.responded_at),
            selected_at=safe_datetime_iso(record.selected_at),
            created_at=safe_datetime_iso(record.created_at),
            updated_at=safe_datetime_iso(record.updated_at),
            match_score=MatchScoreResponse.from_score(record.match_score) if record.match_score else None,
        )


class ProposalResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    proposal: ProposalDetail


class SelectionResponse(BaseModel):
    success: bool
    message: str
    proposal: ProposalDetail
    rejected_count: int


class ProposalsResponse(BaseModel):
    success: bool
    request_id: str
    total_proposals: int
    proposals: List[ProposalDetail]


class ComparisonMetricsResponse(BaseModel):
    avg_cost: float
    min_cost: int
    max_cost: int
    avg_match_score: float
    proposal_count: int

    @classmethod
    def from_metrics(cls, metrics: ComparisonMetrics) -> "ComparisonMetricsResponse":
        return cls(
            avg_cost=metrics.avg_cost,
            min_cost=metrics.min_cost,
            max_cost=metrics.max_cost,
            avg_match_score=metrics.avg_match_score,
            proposal_count=metrics.proposal_count,
        )


class ComparisonResponse(BaseModel):
    success: bool
    request_id: str
    proposals: List[ProposalDetail]
    comparison_metrics: ComparisonMetricsResponse


class RequestDetail(BaseModel):
    id: str
    user_id: str
    title: str
    description: str
    project_type: str
    status: str
    budget_min: Optional[int]
    budget_max: Optional[int]
    requirements: Dict[str, Any] = Field(default_factory=dict)
    published_at: Optional[str]
    closed_at: Optional[str]

    @classmethod
    def from_record(cls, record: RequestRecord) -> "RequestDetail":
        return cls(
            id=record.id,
            user_id=record.user_id,
            title=record.title,
            description=record.description,
            project_type=enum_value(record.project_type),
            status=enum_value(record.status),
            budget_min=record.budget_min,
            budget_max=record.budget_max,
            requirements=record.requirements,
            published_at=safe_datetime_iso(record.published_at),
            closed_at=safe_datetime_iso(record.closed_at),
        )


class RequestResponse(BaseModel):
    success: bool
    request: RequestDetail
