#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field, HttpUrl
from typing import List, Optional

from core.matching.models import ProjectType


class RequestRequirements(BaseModel):
    """
    Free-form project requirements.

    tech_stacks, specialties and location feed matching; any other key
    is stored as given.
    """
    model_config = ConfigDict(extra="allow")

    tech_stacks: List[str] = Field(default_factory=list, description="Required technologies")
    specialties: List[str] = Field(default_factory=list, description="Required specialties")
    location: Optional[str] = None
    features: Optional[List[str]] = None
    integrations: Optional[List[str]] = None
    additional_notes: Optional[str] = None


class RequestCreate(BaseModel):
    """Draft quote request posted by a client."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Shop frontend rebuild",
                "description": "Rebuild the storefront with a modern SPA stack.",
                "project_type": "WEB_DEVELOPMENT",
                "budget_min": 1000000,
                "budget_max": 3000000,
                "requirements": {"tech_stacks": ["React", "PostgreSQL"]}
            }
        }
    )

    title: str = Field(..., min_length=5, max_length=100)
    description: str = Field(..., min_length=20, max_length=2000)
    project_type: ProjectType
    budget_min: Optional[int] = Field(None, gt=0, description="Lower budget bound")
    budget_max: Optional[int] = Field(None, gt=0, description="Upper budget bound")
    requirements: Optional[RequestRequirements] = None


class ProposalSubmission(BaseModel):
    """
    Proposal submitted by a company.

    The minimum narrative length is checked against the configured
    ProposalConfig.min_proposal_length by the route; the Field bound
    only rejects empty text.
    """
    company_id: str = Field(..., min_length=1, description="Submitting company")
    estimated_cost: int = Field(..., gt=0, description="Estimated cost (positive integer)")
    estimated_duration: str = Field(..., min_length=1, description="Estimated duration, free text")
    proposal: str = Field(..., min_length=1, description="Proposal narrative")
    attachments: List[HttpUrl] = Field(default_factory=list, description="Attachment URLs")
