"""Proposal Module - proposal lifecycle rules and comparison metrics.

The transactional operations live in core.proposals.service and are
imported from there directly, which keeps this package importable by
database.models without a cycle.
"""
from core.proposals.states import (
    ProposalStatus, RequestStatus, ProposalEvent,
    PROPOSAL_TRANSITIONS, TERMINAL_PROPOSAL_STATES, OPEN_PROPOSAL_STATES,
    is_terminal, can_transition, next_status, can_transition_request,
    require_request_transition
)
from core.proposals.comparison import ComparisonMetrics, compare_proposals

__all__ = [
    'ProposalStatus', 'RequestStatus', 'ProposalEvent',
    'PROPOSAL_TRANSITIONS', 'TERMINAL_PROPOSAL_STATES', 'OPEN_PROPOSAL_STATES',
    'is_terminal', 'can_transition', 'next_status', 'can_transition_request',
    'require_request_transition',
    'ComparisonMetrics', 'compare_proposals',
]
