"""Tests configuration and fixtures."""

from pathlib import Path

import pytest

from calmline.config import DetectorSettings, Settings
from calmline.domain.models.signals import Lexicon
from calmline.services.detection.lexicon_loader import load_lexicon
from calmline.services.safety.stress_detector import StressSignalDetector

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def lexicon_path() -> Path:
    """Path of the reviewed test lexicon."""
    return FIXTURES_DIR / "lexicon.json"


@pytest.fixture
def detector_settings(lexicon_path: Path) -> DetectorSettings:
    """Detector settings pointing at the test lexicon."""
    return DetectorSettings(
        lexicon_path=lexicon_path,
        crisis_line="Test Crisis Line (000)",
        support_resources_url="https://example.org/support",
    )


@pytest.fixture
def test_settings(detector_settings: DetectorSettings) -> Settings:
    """Create test settings."""
    return Settings(
        env="development",
        debug=True,
        detector=detector_settings,
    )


@pytest.fixture
def lexicon(detector_settings: DetectorSettings) -> Lexicon:
    """Test lexicon, loaded through the real loader."""
    return load_lexicon(detector_settings)


@pytest.fixture
def detector(detector_settings: DetectorSettings) -> StressSignalDetector:
    """Detector built from the test lexicon."""
    return StressSignalDetector.from_settings(detector_settings)


@pytest.fixture
def builtin_detector() -> StressSignalDetector:
    """Detector built from the built-in lexicon."""
    return StressSignalDetector.from_settings(DetectorSettings(lexicon_path=None))
