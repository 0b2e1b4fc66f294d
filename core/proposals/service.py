#!/usr/bin/env python3
"""
Proposal Service - transactional proposal lifecycle operations.

Every operation runs in its own unit of work. Rows are locked in a
fixed order (request first, then proposal) so that concurrent
submissions and selections on the same request serialize instead of
deadlocking, and every guard is re-checked after the locks are held.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from core.config_loader import MatchingConfig
from core.exceptions import (
    CompanyNotFoundException,
    PermissionDeniedException,
    ProposalNotFoundException,
    RequestNotFoundException,
    StateConflictException,
)
from core.matching.dto import company_to_profile, request_to_profile
from core.matching.scoring import calculate_match_score
from core.proposals.comparison import ComparisonMetrics, compare_proposals
from core.proposals.dto import ProposalRecord, SelectionResult, proposal_to_record
from core.proposals.states import (
    ProposalEvent,
    ProposalStatus,
    RequestStatus,
    next_status,
    require_request_transition,
)
from database.database import Database
from database.models import Proposal, Request
from database.uow import Repositories, marketplace_uow

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProposalService:
    """Submit, select and reject proposals."""

    def __init__(
        self,
        database: Database,
        matching_config: Optional[MatchingConfig] = None,
        isolation_level: Optional[str] = None,
        clock: Callable[[], datetime] = _utcnow
    ):
        self.database = database
        self.matching_config = matching_config or MatchingConfig()
        self.isolation_level = isolation_level
        self.clock = clock

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    @staticmethod
    def _load_request(repos: Repositories, request_id: str, for_update: bool = False) -> Request:
        request = repos.requests.get_by_id(request_id, for_update=for_update)
        if request is None:
            raise RequestNotFoundException(f"Request {request_id} not found")
        return request

    @staticmethod
    def _check_owner(request: Request, owner_id: Optional[str]) -> None:
        if owner_id is not None and request.user_id != owner_id:
            logger.warning(f"User {owner_id} is not the owner of request {request.id}")
            raise PermissionDeniedException("Only the request owner can manage its proposals")

    @staticmethod
    def _require_open(request: Request, message: str) -> None:
        if request.status != RequestStatus.PUBLISHED:
            logger.warning(f"Request {request.id} is {request.status.value}: {message}")
            raise StateConflictException(message, current_state=request.status)

    def _lock_proposal_and_request(self, repos: Repositories, proposal_id: str) -> Tuple[Proposal, Request]:
        proposal = repos.proposals.get_by_id(proposal_id)
        if proposal is None:
            raise ProposalNotFoundException(f"Proposal {proposal_id} not found")

        request = self._load_request(repos, proposal.request_id, for_update=True)
        proposal = repos.proposals.get_by_id(proposal_id, for_update=True)
        return proposal, request

    def _score(self, proposal: Proposal, request: Request):
        return calculate_match_score(
            company_to_profile(proposal.company),
            request_to_profile(request),
            self.matching_config
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def submit_proposal(
        self,
        request_id: str,
        company_id: str,
        estimated_cost: int,
        estimated_duration: str,
        proposal: str,
        attachments: Optional[Iterable[str]] = None
    ) -> ProposalRecord:
        """
        Submit or re-submit a company's proposal (-> RESPONDED).

        Creates the row on first submission; a PENDING or RESPONDED row
        is updated in place and responded_at is reset.

        Raises:
            RequestNotFoundException, CompanyNotFoundException
            PermissionDeniedException: If the company is not verified.
            StateConflictException: If the request is not published or the
                pair's proposal is already SELECTED or REJECTED.
        """
        with marketplace_uow(self.database) as repos:
            request = self._load_request(repos, request_id, for_update=True)

            company = repos.companies.get_by_id(company_id)
            if company is None:
                raise CompanyNotFoundException(f"Company {company_id} not found")
            if not company.is_verified:
                raise PermissionDeniedException("Only verified companies can submit proposals")

            self._require_open(request, "Only published requests can receive proposals")

            existing = repos.proposals.get_for_pair(request_id, company_id, for_update=True)
            current = existing.status if existing is not None else ProposalStatus.PENDING
            target = next_status(current, ProposalEvent.SUBMIT)
            now = self.clock()

            if existing is None:
                row = Proposal(request_id=request_id, company_id=company_id)
            else:
                row = existing

            row.estimated_cost = estimated_cost
            row.estimated_duration = estimated_duration
            row.proposal = proposal
            row.attachments = list(attachments or [])
            row.status = target
            row.responded_at = now

            try:
                repos.proposals.add(row)
            except IntegrityError as e:
                # Lost a race with a concurrent first submission for the same pair
                raise StateConflictException(
                    "Company has already submitted a proposal for this request"
                ) from e

            record = proposal_to_record(row)

        logger.info(
            f"Proposal {record.id} {current.value} -> {target.value} "
            f"(request {request_id}, company {company_id})"
        )
        return record

    def select_proposal(self, proposal_id: str, owner_id: Optional[str] = None) -> SelectionResult:
        """
        Select a proposal, reject all other open proposals of the request
        and close the request, as one atomic transaction.

        Raises:
            ProposalNotFoundException
            PermissionDeniedException: If owner_id is not the request owner.
            StateConflictException: If the proposal is not RESPONDED or the
                request is no longer published (e.g. another proposal won).
            TransactionFailedException: If the transaction could not commit.
        """
        with marketplace_uow(self.database, isolation_level=self.isolation_level) as repos:
            proposal, request = self._lock_proposal_and_request(repos, proposal_id)
            self._check_owner(request, owner_id)

            next_status(proposal.status, ProposalEvent.SELECT)
            require_request_transition(request.status, RequestStatus.CLOSED)

            now = self.clock()

            # Compare-and-set writes: a zero-row update means a concurrent
            # transaction got there first, and everything rolls back.
            if repos.requests.close_if_published(request.id, now) != 1:
                raise StateConflictException(
                    "Request was closed by a concurrent selection",
                    current_state=RequestStatus.CLOSED
                )
            if repos.proposals.select_if_responded(proposal_id, now) != 1:
                raise StateConflictException("Proposal is no longer in RESPONDED status")

            rejected = repos.proposals.reject_siblings(request.id, proposal_id)

            selected = repos.proposals.get_by_id(proposal_id)
            result = SelectionResult(
                proposal=proposal_to_record(selected),
                rejected_count=rejected,
                request_id=request.id,
            )

        logger.info(
            f"Proposal {proposal_id} selected for request {result.request_id}; "
            f"{rejected} other proposal(s) rejected, request closed"
        )
        return result

    def reject_proposal(self, proposal_id: str, owner_id: Optional[str] = None) -> ProposalRecord:
        """
        Reject a single RESPONDED proposal. Sibling proposals are untouched.

        Raises:
            ProposalNotFoundException
            PermissionDeniedException: If owner_id is not the request owner.
            StateConflictException: If the proposal is not RESPONDED.
        """
        with marketplace_uow(self.database) as repos:
            proposal, request = self._lock_proposal_and_request(repos, proposal_id)
            self._check_owner(request, owner_id)

            next_status(proposal.status, ProposalEvent.REJECT)

            if repos.proposals.reject_if_responded(proposal_id) != 1:
                raise StateConflictException("Proposal is no longer in RESPONDED status")

            record = proposal_to_record(repos.proposals.get_by_id(proposal_id))

        logger.info(f"Proposal {proposal_id} rejected by request owner")
        return record

    def invite_companies(self, request_id: str, company_ids: Iterable[str]) -> List[ProposalRecord]:
        """
        Record PENDING proposals for matched companies.

        Pairs that already have a proposal keep it unchanged.
        """
        with marketplace_uow(self.database) as repos:
            request = self._load_request(repos, request_id, for_update=True)
            self._require_open(request, "Only published requests can invite companies")

            records = []
            for company_id in dict.fromkeys(company_ids):
                if repos.companies.get_by_id(company_id) is None:
                    raise CompanyNotFoundException(f"Company {company_id} not found")
                records.append(proposal_to_record(repos.proposals.create_pending(request_id, company_id)))

        logger.info(f"Invited {len(records)} companies to request {request_id}")
        return records

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_proposal(self, proposal_id: str, owner_id: Optional[str] = None) -> ProposalRecord:
        """A single proposal with its live match score (request owner only)."""
        with marketplace_uow(self.database) as repos:
            proposal = repos.proposals.get_by_id(proposal_id)
            if proposal is None:
                raise ProposalNotFoundException(f"Proposal {proposal_id} not found")
            self._check_owner(proposal.request, owner_id)
            return proposal_to_record(proposal, self._score(proposal, proposal.request))

    def list_request_proposals(self, request_id: str, owner_id: Optional[str] = None) -> List[ProposalRecord]:
        """Submitted proposals annotated with a live match score."""
        with marketplace_uow(self.database) as repos:
            request = self._load_request(repos, request_id)
            self._check_owner(request, owner_id)
            return [
                proposal_to_record(p, self._score(p, request))
                for p in repos.proposals.list_for_request(request_id)
            ]

    def compare_request_proposals(
        self,
        request_id: str,
        owner_id: Optional[str] = None
    ) -> Tuple[List[ProposalRecord], ComparisonMetrics]:
        proposals = self.list_request_proposals(request_id, owner_id)
        return proposals, compare_proposals(proposals)
