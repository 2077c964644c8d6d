"""Metrics infrastructure package."""

from calmline.infrastructure.metrics.prometheus_metrics import (
    # Detector metrics
    RISK_ASSESSMENTS_TOTAL,
    SIGNAL_MATCHES_TOTAL,
    ASSESSMENT_LATENCY,
    # Escalation metrics
    ESCALATION_DIRECTIVES_TOTAL,
    ESCALATION_FALLBACKS_TOTAL,
    # Helpers
    track_risk_assessment,
    track_directive,
    track_fallback,
    update_system_info,
    # Router
    metrics_router,
)

__all__ = [
    "RISK_ASSESSMENTS_TOTAL",
    "SIGNAL_MATCHES_TOTAL",
    "ASSESSMENT_LATENCY",
    "ESCALATION_DIRECTIVES_TOTAL",
    "ESCALATION_FALLBACKS_TOTAL",
    "track_risk_assessment",
    "track_directive",
    "track_fallback",
    "update_system_info",
    "metrics_router",
]
