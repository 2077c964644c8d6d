"""Safety services package - scoring, escalation and the detector facade."""

from calmline.services.safety.risk_scorer import RiskScorer, repetition_multiplier
from calmline.services.safety.escalation_policy import EscalationPolicy
from calmline.services.safety.stress_detector import DetectionResult, StressSignalDetector

__all__ = [
    # Risk scoring
    "RiskScorer",
    "repetition_multiplier",
    # Escalation
    "EscalationPolicy",
    # Detector
    "DetectionResult",
    "StressSignalDetector",
]
