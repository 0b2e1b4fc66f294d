import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import case, select, update

from core.proposals.states import ProposalStatus, OPEN_PROPOSAL_STATES
from database.models import Proposal
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ProposalRepository(BaseRepository):
    def get_by_id(self, proposal_id: str, for_update: bool = False) -> Optional[Proposal]:
        stmt = select(Proposal).where(Proposal.id == proposal_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_for_pair(self, request_id: str, company_id: str, for_update: bool = False) -> Optional[Proposal]:
        stmt = select(Proposal).where(
            Proposal.request_id == request_id,
            Proposal.company_id == company_id
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_for_request(self, request_id: str, submitted_only: bool = True) -> List[Proposal]:
        """
        Proposals of a request, SELECTED first, then most recent response.

        submitted_only drops rows the company never answered: PENDING
        invitations and invitations rejected when another proposal won.
        """
        stmt = select(Proposal).where(Proposal.request_id == request_id)
        if submitted_only:
            stmt = stmt.where(
                Proposal.status != ProposalStatus.PENDING,
                Proposal.responded_at.isnot(None)
            )

        selected_first = case((Proposal.status == ProposalStatus.SELECTED, 0), else_=1)
        stmt = stmt.order_by(selected_first, Proposal.responded_at.desc().nulls_last(), Proposal.created_at)
        return list(self.db.execute(stmt).scalars().all())

    def add(self, proposal: Proposal) -> Proposal:
        self.db.add(proposal)
        self.db.flush()
        return proposal

    def create_pending(self, request_id: str, company_id: str) -> Proposal:
        """Invite a company; returns the existing row if the pair already has one."""
        existing = self.get_for_pair(request_id, company_id)
        if existing is not None:
            return existing
        return self.add(Proposal(
            request_id=request_id,
            company_id=company_id,
            status=ProposalStatus.PENDING,
            attachments=[],
        ))

    def _set_status(self, proposal_id: str, expected: ProposalStatus, values: dict) -> int:
        """Compare-and-set status update. Returns the number of rows changed (0 or 1)."""
        self.db.flush()
        stmt = (
            update(Proposal)
            .where(Proposal.id == proposal_id, Proposal.status == expected)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        count = self.db.execute(stmt).rowcount
        if count:
            self.db.expire_all()
        return count

    def select_if_responded(self, proposal_id: str, selected_at: datetime) -> int:
        return self._set_status(
            proposal_id,
            ProposalStatus.RESPONDED,
            {'status': ProposalStatus.SELECTED, 'selected_at': selected_at}
        )

    def reject_if_responded(self, proposal_id: str) -> int:
        return self._set_status(
            proposal_id,
            ProposalStatus.RESPONDED,
            {'status': ProposalStatus.REJECTED}
        )

    def reject_siblings(self, request_id: str, selected_id: str) -> int:
        """Reject every other open (PENDING or RESPONDED) proposal of the request."""
        self.db.flush()
        stmt = (
            update(Proposal)
            .where(
                Proposal.request_id == request_id,
                Proposal.id != selected_id,
                Proposal.status.in_(list(OPEN_PROPOSAL_STATES))
            )
            .values(status=ProposalStatus.REJECTED)
            .execution_options(synchronize_session=False)
        )
        count = self.db.execute(stmt).rowcount
        self.db.expire_all()
        if count > 0:
            logger.info(f"Rejected {count} sibling proposals for request {request_id}")
        return count
