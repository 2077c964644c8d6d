"""
Risk Scorer

Aggregates signal matches into a score and a tier.

ARCHITECTURE: A pure function of (matches, thresholds, decay).
No side effects, no clock, no randomness.

Aggregation:
    For each matched category with n matches:
        contribution = max_weight * (1 + d + d^2 + ... + d^(n-1))
    score = sum of contributions

The first occurrence counts in full and repeats add geometrically
less, so one category can never exceed max_weight / (1 - d). Repeating
a low-weight word cannot push a message into a high tier.

CLINICAL_VALIDATION_REQUIRED: Decay and thresholds are placeholders.
"""

from collections import defaultdict
from typing import Optional, Sequence

from calmline.domain.models.risk_models import RiskAssessment, TierThresholds
from calmline.domain.models.signals import SignalMatch

# Scores are rounded so float summation order cannot change a tier
SCORE_PRECISION = 4


def repetition_multiplier(count: int, decay: float) -> float:
    """Geometric multiplier for `count` matches: 1 + d + ... + d^(count-1)."""
    if count <= 0:
        return 0.0
    if decay == 0:
        return 1.0
    return (1 - decay ** count) / (1 - decay)


class RiskScorer:
    """
    Repetition-dampened category scorer.

    Usage:
        scorer = RiskScorer(thresholds, repeat_decay=0.5)
        assessment = scorer.score(matches)
    """

    def __init__(
        self,
        thresholds: Optional[TierThresholds] = None,
        repeat_decay: float = 0.5,
        lexicon_version: str = "",
    ) -> None:
        if not 0.0 <= repeat_decay < 1.0:
            raise ValueError(f"repeat_decay must be in [0, 1), got {repeat_decay}")
        self.thresholds = thresholds or TierThresholds()
        self.repeat_decay = repeat_decay
        self.lexicon_version = lexicon_version

    def category_scores(self, matches: Sequence[SignalMatch]) -> dict[str, float]:
        """Contribution of each matched category."""
        by_category: dict[str, list[float]] = defaultdict(list)
        for match in matches:
            by_category[match.category].append(match.weight)

        return {
            category: max(weights) * repetition_multiplier(len(weights), self.repeat_decay)
            for category, weights in by_category.items()
        }

    def score(self, matches: Sequence[SignalMatch]) -> RiskAssessment:
        """
        Build the assessment for a message's matches.

        Args:
            matches: Matches in order of occurrence

        Returns:
            RiskAssessment
        """
        contributions = self.category_scores(matches)
        total = round(sum(contributions[c] for c in sorted(contributions)), SCORE_PRECISION)

        return RiskAssessment(
            score=total,
            tier=self.thresholds.tier_for(total),
            matched_categories=frozenset(contributions),
            matches=tuple(matches),
            lexicon_version=self.lexicon_version,
        )
