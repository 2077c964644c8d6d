"""
Escalation Policy

Maps a risk assessment to an escalation directive.

SAFETY-CRITICAL: This module decides whether the crisis protocol
starts. Two rules are absolute:

1. CRITICAL always yields TRIGGER_CRISIS_PROTOCOL. The policy keeps
   no history, so repeated crisis messages in one conversation each
   get their own trigger. Nothing is deduplicated or rate limited.
2. escalate() never raises. On any internal failure it returns the
   fail-safe directive (NOTIFY_COUNSELOR, or the crisis protocol if
   the tier is known to be CRITICAL) with error=True. It never
   falls back to NO_ACTION. Logging, Sentry and metrics calls are
   best-effort and cannot block a directive.
"""

import contextlib
from typing import Any, Callable, Optional

from calmline.config.logging_config import get_logger
from calmline.domain.enums.risk_tier import EscalationAction, RiskTier
from calmline.domain.models.risk_models import EscalationDirective, RiskAssessment
from calmline.infrastructure.metrics import track_directive, track_fallback
from calmline.infrastructure.monitoring import capture_exception_with_context

logger = get_logger(__name__)

# CLINICAL_REVIEW_REQUIRED
TIER_ACTIONS: dict[RiskTier, EscalationAction] = {
    RiskTier.NONE: EscalationAction.NO_ACTION,
    RiskTier.LOW: EscalationAction.SUGGEST_RESOURCES,
    RiskTier.MODERATE: EscalationAction.SUGGEST_RESOURCES,
    RiskTier.HIGH: EscalationAction.NOTIFY_COUNSELOR,
    RiskTier.CRITICAL: EscalationAction.TRIGGER_CRISIS_PROTOCOL,
}

# LEGAL_REVIEW_REQUIRED: User-facing wording
TIER_MESSAGES: dict[RiskTier, str] = {
    RiskTier.NONE: "",
    RiskTier.LOW: (
        "It sounds like things have been a bit heavy lately. "
        "If it helps, here are some ideas for looking after yourself: "
        "{support_resources_url}"
    ),
    RiskTier.MODERATE: (
        "It sounds like you're carrying a lot right now, and that's hard. "
        "You don't have to handle it alone. These resources might help: "
        "{support_resources_url}"
    ),
    RiskTier.HIGH: (
        "Thank you for telling me how you're feeling. "
        "I've asked a counselor to check in with you. "
        "If you want to talk to someone right now, you can reach the {crisis_line}."
    ),
    RiskTier.CRITICAL: (
        "I'm really concerned about what you've shared, and your safety matters. "
        "Please reach out now to the {crisis_line}. "
        "If you are in immediate danger, call your local emergency number."
    ),
}

FALLBACK_MESSAGE = (
    "I want to make sure you're supported. "
    "I've asked a counselor to check in with you. "
    "If you want to talk to someone right now, you can reach the {crisis_line}."
)


class EscalationPolicy:
    """
    Deterministic tier-to-action policy with a fail-safe path.

    Stateless: safe to share across threads and to call repeatedly.

    Usage:
        policy = EscalationPolicy(crisis_line="988 Lifeline")
        directive = policy.escalate(assessment)
    """

    def __init__(
        self,
        crisis_line: str = "988 Suicide & Crisis Lifeline (call or text 988)",
        support_resources_url: str = "https://988lifeline.org",
    ) -> None:
        self._template_values = {
            "crisis_line": crisis_line,
            "support_resources_url": support_resources_url,
        }

    def escalate(self, assessment: RiskAssessment) -> EscalationDirective:
        """
        Select the directive for an assessment.

        Never raises.

        Args:
            assessment: Risk assessment for one message

        Returns:
            EscalationDirective
        """
        try:
            tier = RiskTier(assessment.tier)
            action = TIER_ACTIONS[tier]
            directive = EscalationDirective(
                tier=tier,
                action=action,
                message=TIER_MESSAGES[tier].format(**self._template_values),
            )
        except Exception as e:
            return self.fail_safe(
                error=e,
                stage="escalate",
                tier=_readable_tier(assessment),
            )

        if action == EscalationAction.TRIGGER_CRISIS_PROTOCOL:
            _best_effort(
                lambda: logger.warning(
                    "Crisis protocol directive issued",
                    score=assessment.score,
                    categories=sorted(assessment.matched_categories),
                )
            )
        _best_effort(track_directive, directive.action.value)
        return directive

    def fail_safe(
        self,
        error: BaseException,
        stage: str,
        tier: Optional[RiskTier] = None,
    ) -> EscalationDirective:
        """
        Build the fail-safe directive after an internal error.

        Args:
            error: The exception that was caught
            stage: Where it happened (assess, escalate)
            tier: Tier if it could still be read

        Returns:
            Directive with error=True, never NO_ACTION
        """
        _best_effort(
            logger.error,
            "Detector fault, issuing fail-safe directive",
            stage=stage,
            error_type=type(error).__name__,
            known_tier=tier.name if tier is not None else None,
            exc_info=error,
        )
        _best_effort(capture_exception_with_context, error, stage=stage)
        _best_effort(track_fallback, stage)

        if tier == RiskTier.CRITICAL:
            action = EscalationAction.TRIGGER_CRISIS_PROTOCOL
            message = TIER_MESSAGES[RiskTier.CRITICAL]
        else:
            action = EscalationAction.NOTIFY_COUNSELOR
            message = FALLBACK_MESSAGE
            if tier is None:
                tier = RiskTier.HIGH

        _best_effort(track_directive, action.value)
        return EscalationDirective(
            tier=tier,
            action=action,
            message=message.format(**self._template_values),
            error=True,
            error_detail=f"{stage}: {type(error).__name__}",
        )


def _best_effort(call: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
    """Run a logging or metrics side effect that must not block a directive."""
    try:
        call(*args, **kwargs)
    except Exception as e:
        with contextlib.suppress(Exception):
            logger.warning("Observability call failed", error_type=type(e).__name__)


def _readable_tier(assessment: Any) -> Optional[RiskTier]:
    """Best-effort read of a tier from a possibly broken assessment."""
    try:
        tier = assessment.tier
    except Exception:
        # Unreadable tier: fail-safe uses NOTIFY_COUNSELOR
        return None
    if isinstance(tier, RiskTier):
        return tier
    return None
