"""
CALMLINE - Stress-Signal Detection Service

Detects stress and crisis signals in user chat messages and selects
an escalation directive for the downstream notification service.

IMPORTANT: This is a safety-critical component. Lexicon and
threshold changes require clinical review before deployment.
"""

__version__ = "0.1.0"
__author__ = "CALMLINE Engineering Team"
