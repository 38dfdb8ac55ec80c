"""
Classifier

Maps an influencer's composite score onto a recommendation tier:
- Highly recommended
- Recommended
- Consider
- Not recommended
"""

from typing import Optional

from .constants import RecommendationTier
from .contracts import ScoringPolicy


def classify_score(score: float, policy: Optional[ScoringPolicy] = None) -> RecommendationTier:
    """
    Classify an unrounded composite score into a recommendation tier.

    Args:
        score: Composite score on the 0-100 scale, before display rounding
        policy: Tier boundaries, defaults when omitted

    Returns:
        RecommendationTier enum value
    """
    policy = policy or ScoringPolicy()

    # Check thresholds from highest to lowest
    if score >= policy.tier_highly_recommended:
        return RecommendationTier.HIGHLY_RECOMMENDED
    if score >= policy.tier_recommended:
        return RecommendationTier.RECOMMENDED
    if score >= policy.tier_consider:
        return RecommendationTier.CONSIDER
    return RecommendationTier.NOT_RECOMMENDED
