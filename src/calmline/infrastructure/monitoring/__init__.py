"""Monitoring infrastructure package."""

from calmline.infrastructure.monitoring.sentry_integration import (
    init_sentry,
    capture_exception_with_context,
)

__all__ = [
    "init_sentry",
    "capture_exception_with_context",
]
