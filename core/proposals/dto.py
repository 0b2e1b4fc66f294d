"""Data Transfer Objects for proposal operations.

Built while the unit of work is still open so callers can use them
after the session is closed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

from core.matching.models import MatchScore
from core.proposals.states import ProposalStatus


@dataclass
class ProposalRecord:
    id: str
    request_id: str
    company_id: str
    status: ProposalStatus
    estimated_cost: Optional[int] = None
    estimated_duration: Optional[str] = None
    proposal: Optional[str] = None
    attachments: List[str] = field(default_factory=list)
    responded_at: Optional[datetime] = None
    selected_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    company_name: Optional[str] = None
    match_score: Optional[MatchScore] = None


@dataclass
class SelectionResult:
    """Outcome of a selection: the chosen proposal and the sweep it caused."""
    proposal: ProposalRecord
    rejected_count: int
    request_id: str


def proposal_to_record(proposal: Any, match_score: Optional[MatchScore] = None) -> ProposalRecord:
    company = proposal.company
    return ProposalRecord(
        id=proposal.id,
        request_id=proposal.request_id,
        company_id=proposal.company_id,
        status=ProposalStatus(proposal.status),
        estimated_cost=proposal.estimated_cost,
        estimated_duration=proposal.estimated_duration,
        proposal=proposal.proposal,
        attachments=list(proposal.attachments or []),
        responded_at=proposal.responded_at,
        selected_at=proposal.selected_at,
        created_at=proposal.created_at,
        updated_at=proposal.updated_at,
        company_name=company.name if company is not None else None,
        match_score=match_score,
    )
