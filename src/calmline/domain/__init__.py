"""
CALMLINE Domain Layer

Value objects for signals, assessments and escalation directives.
These models are independent of the HTTP and configuration layers.
"""

from calmline.domain.enums import EscalationAction, RiskTier, SignalKind
from calmline.domain.models import (
    EscalationDirective,
    Lexicon,
    RiskAssessment,
    SignalDefinition,
    SignalMatch,
    TierThresholds,
)

__all__ = [
    # Enums
    "EscalationAction",
    "RiskTier",
    "SignalKind",
    # Models
    "EscalationDirective",
    "Lexicon",
    "RiskAssessment",
    "SignalDefinition",
    "SignalMatch",
    "TierThresholds",
]
