"""
CALMLINE Infrastructure Layer

Observability integrations:
- Prometheus metrics
- Sentry error tracking
"""
