"""Detection services package - normalization, lexicon and matching."""

from calmline.services.detection.lexicon_loader import (
    LexiconConfigError,
    build_lexicon,
    load_lexicon,
)
from calmline.services.detection.signal_matcher import SignalMatcher, compile_signal_regex
from calmline.services.detection.text_normalizer import NormalizedText, TextNormalizer

__all__ = [
    "LexiconConfigError",
    "NormalizedText",
    "SignalMatcher",
    "TextNormalizer",
    "build_lexicon",
    "compile_signal_regex",
    "load_lexicon",
]
