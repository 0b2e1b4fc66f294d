#!/usr/bin/env python3
"""
Proposal and request status state machines.

Transition tables are explicit so every allowed edge is visible in one
place. Anything not listed is a state conflict.
"""

import enum
import logging
from types import MappingProxyType

from core.exceptions import StateConflictException

logger = logging.getLogger(__name__)


class ProposalStatus(str, enum.Enum):
    PENDING = "PENDING"
    RESPONDED = "RESPONDED"
    SELECTED = "SELECTED"
    REJECTED = "REJECTED"


class RequestStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    CLOSED = "CLOSED"
    CANCELLED = "CANCELLED"


class ProposalEvent(str, enum.Enum):
    SUBMIT = "submit"
    SELECT = "select"
    REJECT = "reject"
    # Sibling proposals rejected as a side effect of a selection
    AUTO_REJECT = "auto_reject"


PROPOSAL_TRANSITIONS = MappingProxyType({
    (ProposalStatus.PENDING, ProposalEvent.SUBMIT): ProposalStatus.RESPONDED,
    (ProposalStatus.RESPONDED, ProposalEvent.SUBMIT): ProposalStatus.RESPONDED,
    (ProposalStatus.RESPONDED, ProposalEvent.SELECT): ProposalStatus.SELECTED,
    (ProposalStatus.RESPONDED, ProposalEvent.REJECT): ProposalStatus.REJECTED,
    (ProposalStatus.PENDING, ProposalEvent.AUTO_REJECT): ProposalStatus.REJECTED,
    (ProposalStatus.RESPONDED, ProposalEvent.AUTO_REJECT): ProposalStatus.REJECTED,
})

TERMINAL_PROPOSAL_STATES = frozenset({ProposalStatus.SELECTED, ProposalStatus.REJECTED})

# Proposals a selection sweeps to REJECTED
OPEN_PROPOSAL_STATES = frozenset({ProposalStatus.PENDING, ProposalStatus.RESPONDED})

# CANCELLED is set outside this service and has no exits
REQUEST_TRANSITIONS = MappingProxyType({
    RequestStatus.DRAFT: frozenset({RequestStatus.PUBLISHED}),
    RequestStatus.PUBLISHED: frozenset({RequestStatus.CLOSED}),
    RequestStatus.CLOSED: frozenset(),
    RequestStatus.CANCELLED: frozenset(),
})


def is_terminal(status: ProposalStatus) -> bool:
    return ProposalStatus(status) in TERMINAL_PROPOSAL_STATES


def can_transition(status: ProposalStatus, event: ProposalEvent) -> bool:
    return (ProposalStatus(status), ProposalEvent(event)) in PROPOSAL_TRANSITIONS


def next_status(status: ProposalStatus, event: ProposalEvent) -> ProposalStatus:
    """
    Resolve the target status for an event.

    Raises:
        StateConflictException: If the event is not allowed from `status`.
    """
    key = (ProposalStatus(status), ProposalEvent(event))
    target = PROPOSAL_TRANSITIONS.get(key)
    if target is None:
        raise StateConflictException(
            f"Cannot {key[1].value} a proposal in status {key[0].value}",
            current_state=key[0]
        )
    return target


def can_transition_request(status: RequestStatus, target: RequestStatus) -> bool:
    return RequestStatus(target) in REQUEST_TRANSITIONS[RequestStatus(status)]


def require_request_transition(status: RequestStatus, target: RequestStatus) -> RequestStatus:
    """
    Guard a request status change.

    Raises:
        StateConflictException: If `target` is not reachable from `status`.
    """
    status, target = RequestStatus(status), RequestStatus(target)
    if not can_transition_request(status, target):
        raise StateConflictException(
            f"Cannot move a request from {status.value} to {target.value}",
            current_state=status
        )
    return target
