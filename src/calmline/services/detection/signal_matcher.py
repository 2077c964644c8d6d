"""
Signal Matcher

Scans a message against the lexicon and returns every occurrence
of every signal, in order of appearance.

Matching rules:
- Case-insensitive and diacritic-insensitive (see TextNormalizer)
- Literal terms match on word boundaries only. "stressed" matches
  the term "stress"; "compressed" does not.
- Literal terms accept common inflectional endings on the last word
- Pattern terms have their non-ASCII characters folded like message
  text, so accented patterns still match
- Each occurrence yields its own SignalMatch

CLINICAL_REVIEW_REQUIRED: The inflection list widens what a literal
term catches. Review it together with the lexicon.
"""

import re
from typing import Iterable, Optional

from calmline.config.logging_config import get_logger
from calmline.domain.enums.risk_tier import SignalKind
from calmline.domain.models.signals import SignalDefinition, SignalMatch
from calmline.services.detection.text_normalizer import TextNormalizer

logger = get_logger(__name__)

# Endings accepted after the last word of a literal term
INFLECTION_SUFFIXES: tuple[str, ...] = (
    "s", "es", "ed", "d", "ing", "ful", "ness", "ly",
)

_SUFFIX_GROUP = "(?:" + "|".join(INFLECTION_SUFFIXES) + ")?"

_default_normalizer = TextNormalizer()


def compile_signal_regex(
    kind: SignalKind,
    term: str,
    normalizer: Optional[TextNormalizer] = None,
) -> re.Pattern:
    """
    Build the compiled matcher for a lexicon entry.

    Args:
        kind: Literal or pattern
        term: Term text or regex source
        normalizer: Normalizer applied to the term or pattern source

    Returns:
        Compiled regex for normalized text

    Raises:
        ValueError: Empty literal term
        re.error: Invalid pattern
    """
    normalizer = normalizer or _default_normalizer
    if kind == SignalKind.PATTERN:
        return re.compile(normalizer.normalize_pattern(term), re.IGNORECASE)

    normalized = normalizer.normalize_term(term)
    words = normalized.split()
    if not words:
        raise ValueError(f"Literal term {term!r} is empty after normalization")

    body = r"\s+".join(re.escape(w) for w in words)
    return re.compile(rf"(?<!\w){body}{_SUFFIX_GROUP}(?!\w)", re.IGNORECASE)


class SignalMatcher:
    """
    Lexicon matcher over normalized text.

    Stateless after construction; safe to share across threads.

    Usage:
        matcher = SignalMatcher(lexicon.signals)
        matches = matcher.match("I feel so overwhelmed")
    """

    def __init__(
        self,
        signals: Iterable[SignalDefinition],
        normalizer: Optional[TextNormalizer] = None,
    ) -> None:
        self._signals: tuple[SignalDefinition, ...] = tuple(signals)
        self._normalizer = normalizer or _default_normalizer

    @property
    def signals(self) -> tuple[SignalDefinition, ...]:
        return self._signals

    def match(self, text: object) -> list[SignalMatch]:
        """
        Find all signal occurrences in a message.

        Args:
            text: Raw user message. Anything that is not a non-empty
                string yields no matches.

        Returns:
            Matches ordered by source position, then signal id
        """
        if not isinstance(text, str):
            if text is not None:
                logger.warning(
                    "Non-string message treated as empty",
                    input_type=type(text).__name__,
                )
            return []

        normalized = self._normalizer.normalize(text)
        if not normalized.text:
            return []

        matches: list[SignalMatch] = []
        for signal in self._signals:
            for found in signal.regex.finditer(normalized.text):
                if found.end() == found.start():
                    continue
                start, end = normalized.source_span(found.start(), found.end())
                matches.append(SignalMatch(
                    signal_id=signal.signal_id,
                    category=signal.category,
                    weight=signal.weight,
                    position=start,
                    matched_text=text[start:end],
                ))

        matches.sort(key=lambda m: (m.position, m.signal_id))
        return matches
