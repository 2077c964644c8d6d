"""
Prometheus Metrics

Detector and escalation metrics, exposed at /metrics for scraping.

ARCHITECTURE: Metrics are decoupled from business logic.
Only increment/observe; never block on metrics operations.
Labels are tiers, actions and categories only. Never message text.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Histogram,
    Info,
    generate_latest,
)
from fastapi import APIRouter, Response

# =============================================================================
# DETECTOR METRICS
# =============================================================================

RISK_ASSESSMENTS_TOTAL = Counter(
    "calmline_risk_assessments_total",
    "Risk assessments by tier",
    ["tier"],  # none, low, moderate, high, critical
)

SIGNAL_MATCHES_TOTAL = Counter(
    "calmline_signal_matches_total",
    "Signal matches by lexicon category",
    ["category"],
)

ASSESSMENT_LATENCY = Histogram(
    "calmline_assessment_duration_seconds",
    "Time spent assessing a single message",
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1],
)

# =============================================================================
# ESCALATION METRICS
# =============================================================================

ESCALATION_DIRECTIVES_TOTAL = Counter(
    "calmline_escalation_directives_total",
    "Escalation directives by action",
    ["action"],
)

ESCALATION_FALLBACKS_TOTAL = Counter(
    "calmline_escalation_fallbacks_total",
    "Fail-safe directives issued after an internal error",
    ["stage"],  # assess, escalate
)

# =============================================================================
# SYSTEM INFO
# =============================================================================

SYSTEM_INFO = Info(
    "calmline_system",
    "CALMLINE system information",
)


def track_risk_assessment(tier: str, categories: list[str]) -> None:
    """Record assessment tier and matched categories."""
    RISK_ASSESSMENTS_TOTAL.labels(tier=tier.lower()).inc()
    for category in categories:
        SIGNAL_MATCHES_TOTAL.labels(category=category).inc()


def track_directive(action: str) -> None:
    """Record an escalation directive."""
    ESCALATION_DIRECTIVES_TOTAL.labels(action=action).inc()


def track_fallback(stage: str) -> None:
    """Record a fail-safe directive."""
    ESCALATION_FALLBACKS_TOTAL.labels(stage=stage).inc()


def update_system_info(
    environment: str,
    lexicon_version: str,
    version: str = "0.1.0",
) -> None:
    """Update system info metric with runtime values."""
    SYSTEM_INFO.info({
        "version": version,
        "environment": environment,
        "lexicon_version": lexicon_version,
    })


# =============================================================================
# METRICS ENDPOINT
# =============================================================================

metrics_router = APIRouter(tags=["metrics"])


@metrics_router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format for scraping.
    """
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
    )
