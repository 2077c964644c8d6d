"""
API Dependencies

Holds the process-wide detector built during application startup.
"""

from typing import Optional

from calmline.services.safety.stress_detector import StressSignalDetector

_detector: Optional[StressSignalDetector] = None


def set_detector(detector: Optional[StressSignalDetector]) -> None:
    """Install (or clear) the process-wide detector."""
    global _detector
    _detector = detector


def get_detector() -> StressSignalDetector:
    """Get the process-wide detector (FastAPI dependency)."""
    if _detector is None:
        raise RuntimeError("Detector not initialized")
    return _detector


def detector_ready() -> bool:
    """Whether the detector and its lexicon are loaded."""
    return _detector is not None and len(_detector.lexicon) > 0
