"""
Stress-Signal Detector

Entry point for the detection pipeline:

    text -> SignalMatcher -> RiskScorer -> EscalationPolicy

The detector owns the process-wide lexicon. It is built once at
startup and shared read-only by every request, with no locks and
no per-request state.

SAFETY-CRITICAL: evaluate() is the call the HTTP layer uses. It
always returns a directive, even when assessment fails.
"""

import time
from dataclasses import dataclass
from typing import Optional

from calmline.config.logging_config import get_logger
from calmline.config.settings import DetectorSettings
from calmline.domain.models.risk_models import EscalationDirective, RiskAssessment
from calmline.domain.models.signals import Lexicon
from calmline.infrastructure.metrics import ASSESSMENT_LATENCY, track_risk_assessment
from calmline.services.detection.lexicon_loader import load_lexicon
from calmline.services.detection.signal_matcher import SignalMatcher
from calmline.services.safety.escalation_policy import EscalationPolicy
from calmline.services.safety.risk_scorer import RiskScorer

logger = get_logger(__name__)


@dataclass(frozen=True)
class DetectionResult:
    """
    Assessment plus directive for one message.

    Attributes:
        assessment: Risk assessment, None if assessment failed
        directive: Escalation directive, always present
    """

    assessment: Optional[RiskAssessment]
    directive: EscalationDirective

    def to_dict(self) -> dict:
        return {
            "assessment": self.assessment.to_dict() if self.assessment else None,
            "directive": self.directive.to_dict(),
        }


class StressSignalDetector:
    """
    Stress-signal detection and escalation.

    Usage:
        detector = StressSignalDetector.from_settings(settings.detector)
        assessment = detector.assess("I feel so overwhelmed")
        directive = detector.escalate(assessment)

        # or both, with the fail-safe path
        result = detector.evaluate("I feel so overwhelmed")
    """

    def __init__(
        self,
        lexicon: Lexicon,
        policy: Optional[EscalationPolicy] = None,
    ) -> None:
        self._lexicon = lexicon
        self._matcher = SignalMatcher(lexicon.signals)
        self._scorer = RiskScorer(
            thresholds=lexicon.thresholds,
            repeat_decay=lexicon.repeat_decay,
            lexicon_version=lexicon.version,
        )
        self._policy = policy or EscalationPolicy()

    @classmethod
    def from_settings(cls, settings: Optional[DetectorSettings] = None) -> "StressSignalDetector":
        """
        Load the configured lexicon and build a detector.

        Raises:
            LexiconConfigError: Lexicon cannot be loaded
        """
        settings = settings or DetectorSettings()
        return cls(
            lexicon=load_lexicon(settings),
            policy=EscalationPolicy(
                crisis_line=settings.crisis_line,
                support_resources_url=settings.support_resources_url,
            ),
        )

    @property
    def lexicon(self) -> Lexicon:
        return self._lexicon

    def assess(self, text: object) -> RiskAssessment:
        """
        Assess a single message.

        Empty or non-string input yields a NONE assessment.

        Args:
            text: Raw user message

        Returns:
            RiskAssessment
        """
        started = time.perf_counter()

        matches = self._matcher.match(text)
        assessment = self._scorer.score(matches)

        ASSESSMENT_LATENCY.observe(time.perf_counter() - started)
        track_risk_assessment(
            assessment.tier.name,
            [m.category for m in assessment.matches],
        )

        if assessment.matches:
            logger.info(
                "Stress signals detected",
                tier=assessment.tier.name,
                score=assessment.score,
                match_count=assessment.match_count,
                categories=sorted(assessment.matched_categories),
            )

        return assessment

    def escalate(self, assessment: RiskAssessment) -> EscalationDirective:
        """Select the escalation directive for an assessment. Never raises."""
        return self._policy.escalate(assessment)

    def evaluate(self, text: object) -> DetectionResult:
        """
        Assess and escalate one message.

        A fault during assessment is logged and turned into the
        fail-safe directive instead of propagating.

        Args:
            text: Raw user message

        Returns:
            DetectionResult
        """
        try:
            assessment = self.assess(text)
        except Exception as e:
            return DetectionResult(
                assessment=None,
                directive=self._policy.fail_safe(error=e, stage="assess"),
            )

        return DetectionResult(
            assessment=assessment,
            directive=self.escalate(assessment),
        )
