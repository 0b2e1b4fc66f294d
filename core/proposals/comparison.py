#!/usr/bin/env python3
"""
Proposal comparison metrics.

Aggregates over the submitted proposals of a single request. Values a
proposal does not carry are left out of the respective aggregate
instead of counting as zero.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from core.matching.models import MatchScore


class ComparableProposal(Protocol):
    estimated_cost: Optional[int]
    match_score: Optional[MatchScore]


@dataclass
class ComparisonMetrics:
    avg_cost: float = 0.0
    min_cost: int = 0
    max_cost: int = 0
    avg_match_score: float = 0.0
    proposal_count: int = 0


def compare_proposals(proposals: Iterable[ComparableProposal]) -> ComparisonMetrics:
    proposals = list(proposals)

    costs = [p.estimated_cost for p in proposals if p.estimated_cost is not None]
    scores = [p.match_score.total for p in proposals if p.match_score is not None]

    return ComparisonMetrics(
        avg_cost=sum(costs) / len(costs) if costs else 0.0,
        min_cost=min(costs) if costs else 0,
        max_cost=max(costs) if costs else 0,
        avg_match_score=sum(scores) / len(scores) if scores else 0.0,
        proposal_count=len(proposals),
    )
