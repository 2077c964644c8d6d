"""Domain models package."""

from calmline.domain.models.risk_models import (
    EscalationDirective,
    RiskAssessment,
    TierThresholds,
)
from calmline.domain.models.signals import Lexicon, SignalDefinition, SignalMatch

__all__ = [
    "EscalationDirective",
    "Lexicon",
    "RiskAssessment",
    "SignalDefinition",
    "SignalMatch",
    "TierThresholds",
]
