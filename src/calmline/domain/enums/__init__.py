"""Domain enums package."""

from calmline.domain.enums.risk_tier import EscalationAction, RiskTier, SignalKind

__all__ = ["EscalationAction", "RiskTier", "SignalKind"]
