"""
Risk Models

Data models for risk assessment and escalation.

SAFETY-CRITICAL: This module defines the risk classification system.
All definitions require clinical review.

ARCHITECTURE: A RiskAssessment is a value. It carries no ids or
timestamps, so the same text always produces an equal assessment.
"""

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from calmline.domain.enums.risk_tier import EscalationAction, RiskTier

if TYPE_CHECKING:
    from calmline.domain.models.signals import SignalMatch


@dataclass(frozen=True)
class TierThresholds:
    """
    Score cut points for each tier (score >= threshold).

    CLINICAL_VALIDATION_REQUIRED: Placeholder values pending
    clinical and product input.
    """

    low: float = 1.0
    moderate: float = 3.0
    high: float = 6.0
    critical: float = 10.0

    def __post_init__(self) -> None:
        cuts = (self.low, self.moderate, self.high, self.critical)
        if not all(math.isfinite(c) for c in cuts):
            raise ValueError(f"Tier thresholds must be finite, got {cuts}")
        if cuts[0] <= 0:
            raise ValueError(f"Tier thresholds must be positive, got low={self.low}")
        if any(a >= b for a, b in zip(cuts, cuts[1:])):
            raise ValueError(f"Tier thresholds must be strictly increasing, got {cuts}")

    def tier_for(self, score: float) -> RiskTier:
        """Map a score to its tier."""
        if score >= self.critical:
            return RiskTier.CRITICAL
        if score >= self.high:
            return RiskTier.HIGH
        if score >= self.moderate:
            return RiskTier.MODERATE
        if score >= self.low:
            return RiskTier.LOW
        return RiskTier.NONE

    def to_dict(self) -> dict:
        return {
            "low": self.low,
            "moderate": self.moderate,
            "high": self.high,
            "critical": self.critical,
        }


@dataclass(frozen=True)
class RiskAssessment:
    """
    Risk assessment for a single message.

    Attributes:
        score: Aggregate, repetition-dampened signal weight
        tier: Tier derived from score
        matched_categories: Categories with at least one match
        matches: Matches in order of occurrence
        lexicon_version: Lexicon the assessment was made with
    """

    score: float = 0.0
    tier: RiskTier = RiskTier.NONE
    matched_categories: frozenset[str] = field(default_factory=frozenset)
    matches: tuple["SignalMatch", ...] = ()
    lexicon_version: str = ""

    @property
    def match_count(self) -> int:
        return len(self.matches)

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "tier": self.tier.name,
            "matched_categories": sorted(self.matched_categories),
            "matches": [m.to_dict() for m in self.matches],
            "lexicon_version": self.lexicon_version,
        }


@dataclass(frozen=True)
class EscalationDirective:
    """
    Action handed to the notification / crisis-escalation service.

    Attributes:
        tier: Tier the directive was derived from
        action: Selected action
        message: Human-readable text for the user or counselor
        error: True when produced by the fail-safe path
        error_detail: Short description of the failure
    """

    tier: RiskTier
    action: EscalationAction
    message: str
    error: bool = False
    error_detail: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "tier": self.tier.name,
            "action": self.action.value,
            "message": self.message,
            "error": self.error,
        }
