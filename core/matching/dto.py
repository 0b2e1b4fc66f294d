"""Conversion of ORM rows into matching profiles.

Profiles are plain dataclasses that stay usable after the database
session is closed.
"""

from typing import Any

from core.matching.models import CompanyProfile, ProjectType, RequestProfile


def company_to_profile(company: Any) -> CompanyProfile:
    """Build a CompanyProfile from a database.models.Company row."""
    return CompanyProfile(
        id=company.id,
        name=company.name,
        is_verified=bool(company.is_verified),
        accepts_new_projects=bool(company.accepts_new_projects),
        average_rating=float(company.average_rating or 0.0),
        review_count=int(company.review_count or 0),
        tech_stacks=[t.name for t in company.tech_stacks],
        specialties=[s.name for s in company.specialties],
    )


def request_to_profile(request: Any) -> RequestProfile:
    """Build a RequestProfile from a database.models.Request row.

    `requirements` is a free-form JSON payload; only the keys used for
    matching are read.
    """
    requirements = request.requirements or {}
    return RequestProfile(
        id=request.id,
        project_type=ProjectType(request.project_type),
        budget_min=request.budget_min,
        budget_max=request.budget_max,
        tech_stacks=list(requirements.get('techStacks') or requirements.get('tech_stacks') or []),
        specialties=list(requirements.get('specialties') or []),
        location=requirements.get('location'),
    )
