"""
Risk Tier and Escalation Action Enumerations

Defines the ordered risk tiers produced by the risk scorer and the
actions the escalation policy can hand to downstream services.

CLINICAL_REVIEW_REQUIRED: Tier semantics and the action attached
to each tier must be validated by mental health professionals.
"""

from enum import IntEnum, StrEnum


class RiskTier(IntEnum):
    """
    Discrete risk tier derived from the aggregate signal score.

    Ordered: NONE < LOW < MODERATE < HIGH < CRITICAL.
    """

    NONE = 0
    """No distress signals (or too little weight to register)."""

    LOW = 1
    """Mild distress language. Gentle check-in."""

    MODERATE = 2
    """Clear distress across one or more categories."""

    HIGH = 3
    """Strong or compounded distress. A human should look at this."""

    CRITICAL = 4
    """
    Possible crisis.

    SAFETY_NOTE: Always maps to the crisis protocol.
    """


class EscalationAction(StrEnum):
    """Action selected by the escalation policy."""

    NO_ACTION = "no_action"
    """Continue the conversation normally."""

    SUGGEST_RESOURCES = "suggest_resources"
    """Offer self-help resources alongside the reply."""

    NOTIFY_COUNSELOR = "notify_counselor"
    """Hand off to the counselor notification service."""

    TRIGGER_CRISIS_PROTOCOL = "trigger_crisis_protocol"
    """Start the crisis protocol. Never suppressed or rate limited."""


class SignalKind(StrEnum):
    """How a signal definition is matched against text."""

    LITERAL = "literal"
    """Word or phrase, matched on word boundaries with inflections."""

    PATTERN = "pattern"
    """Regular expression applied to normalized text."""
