#!/usr/bin/env python3
"""
Match tiers - coarse display classification of a match score.
"""

from core.matching.models import MatchTier

EXCELLENT = MatchTier(tier='excellent', label='Excellent Match', color='green')
GOOD = MatchTier(tier='good', label='Good Match', color='blue')
FAIR = MatchTier(tier='fair', label='Fair Match', color='yellow')
POOR = MatchTier(tier='poor', label='Poor Match', color='gray')

# (minimum score, tier), checked top-down
_TIER_THRESHOLDS = (
    (80, EXCELLENT),
    (60, GOOD),
    (40, FAIR),
)


def get_match_tier(score: float) -> MatchTier:
    for threshold, tier in _TIER_THRESHOLDS:
        if score >= threshold:
            return tier
    return POOR
