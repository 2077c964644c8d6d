"""
Unit Tests for Signal Matcher

Tests word-boundary matching, inflections, ordering and offsets.
"""

import re

import pytest

from calmline.domain.enums.risk_tier import SignalKind
from calmline.domain.models.signals import Lexicon, SignalDefinition
from calmline.services.detection.signal_matcher import SignalMatcher, compile_signal_regex
from calmline.services.detection.text_normalizer import TextNormalizer


def _literal(signal_id: str, term: str, category: str = "stress", weight: float = 1.0) -> SignalDefinition:
    return SignalDefinition(
        signal_id=signal_id,
        kind=SignalKind.LITERAL,
        term=term,
        category=category,
        weight=weight,
        regex=compile_signal_regex(SignalKind.LITERAL, term),
    )


class TestCompileSignalRegex:
    """Tests for regex construction."""

    def test_literal_allows_inflections(self) -> None:
        regex = compile_signal_regex(SignalKind.LITERAL, "stress")
        for word in ("stress", "stressed", "stresses", "stressful", "stressing"):
            assert regex.search(word), word

    def test_literal_requires_word_start(self) -> None:
        regex = compile_signal_regex(SignalKind.LITERAL, "stress")
        assert regex.search("compressed") is None
        assert regex.search("distress") is None

    def test_literal_rejects_unrelated_suffix(self) -> None:
        regex = compile_signal_regex(SignalKind.LITERAL, "stress")
        assert regex.search("stressor") is None

    def test_multiword_literal(self) -> None:
        regex = compile_signal_regex(SignalKind.LITERAL, "Empty Inside")
        assert regex.search("i feel empty inside")
        assert regex.search("i feel empty  inside") is not None

    def test_literal_empty_after_normalization(self) -> None:
        with pytest.raises(ValueError):
            compile_signal_regex(SignalKind.LITERAL, "\u200b")

    def test_pattern_is_case_insensitive(self) -> None:
        regex = compile_signal_regex(SignalKind.PATTERN, r"\bPANIC\b")
        assert regex.search("panic")

    def test_invalid_pattern_raises(self) -> None:
        with pytest.raises(re.error):
            compile_signal_regex(SignalKind.PATTERN, r"(unclosed")

    def test_pattern_escapes_untouched(self) -> None:
        regex = compile_signal_regex(SignalKind.PATTERN, r"\bSAD\S*\W")
        assert regex.pattern == r"\bSAD\S*\W"

    @pytest.mark.parametrize(
        "pattern,message",
        [
            ("\\bd\u00e9sespoir\\b", "je suis dans le d\u00e9sespoir"),
            ("\\bd\u00e9sespoir\\b", "JE SUIS DANS LE D\u00c9SESPOIR"),
            ("\\bd\u00e9sespoir\\b", "dans le desespoir"),
            ("\\bstra\u00dfe\\b", "STRASSE"),
            ("\\b\ufb01nished\\b", "i'm finished"),
            ("\\bcan\u2019t go on\\b", "i can't go on"),
        ],
    )
    def test_pattern_folded_like_message_text(self, pattern: str, message: str) -> None:
        """Non-ASCII pattern characters are folded the same way as messages."""
        normalizer = TextNormalizer()
        regex = compile_signal_regex(SignalKind.PATTERN, pattern, normalizer)

        assert regex.search(normalizer.normalize(message).text)

    def test_folded_metacharacters_stay_literal(self) -> None:
        """Fullwidth plus folds to an escaped '+', not a quantifier."""
        regex = compile_signal_regex(SignalKind.PATTERN, "c\uff0b\uff0b")

        assert regex.search("c++")
        assert regex.search("cc") is None


class TestSignalMatcher:
    """Test suite for SignalMatcher."""

    @pytest.fixture
    def matcher(self, lexicon: Lexicon) -> SignalMatcher:
        return SignalMatcher(lexicon.signals)

    def test_empty_input(self, matcher: SignalMatcher) -> None:
        assert matcher.match("") == []
        assert matcher.match("   \n ") == []

    def test_none_and_non_string_input(self, matcher: SignalMatcher) -> None:
        """Malformed input is treated as zero matches, not an error."""
        assert matcher.match(None) == []
        assert matcher.match(42) == []
        assert matcher.match({"message": "suicide"}) == []

    def test_no_lexicon_terms(self, matcher: SignalMatcher) -> None:
        assert matcher.match("I had a great day at the beach") == []

    def test_stressed_matches_stress(self, matcher: SignalMatcher) -> None:
        matches = matcher.match("I am so stressed")
        assert [m.signal_id for m in matches] == ["stress"]

    def test_compressed_does_not_match_stress(self, matcher: SignalMatcher) -> None:
        assert matcher.match("The file was compressed") == []

    def test_case_insensitive(self, matcher: SignalMatcher) -> None:
        matches = matcher.match("OVERWHELMED")
        assert [m.signal_id for m in matches] == ["overwhelmed"]

    def test_diacritic_variants_match(self, matcher: SignalMatcher) -> None:
        matches = matcher.match("Feeling ánxíous")
        assert [m.signal_id for m in matches] == ["anxious"]

    def test_decomposed_accents_match(self, matcher: SignalMatcher) -> None:
        matches = matcher.match("Feeling a\u0301nxious")
        assert [m.signal_id for m in matches] == ["anxious"]

    def test_accented_pattern_signal(self) -> None:
        pattern = "\\bd\u00e9sespoir\\b"
        matcher = SignalMatcher([SignalDefinition(
            signal_id="desespoir",
            kind=SignalKind.PATTERN,
            term=pattern,
            category="despair",
            weight=10.0,
            regex=compile_signal_regex(SignalKind.PATTERN, pattern),
        )])

        matches = matcher.match("Je suis dans le d\u00e9sespoir")

        assert [m.signal_id for m in matches] == ["desespoir"]
        assert matches[0].matched_text == "d\u00e9sespoir"

    def test_every_occurrence_is_a_match(self, matcher: SignalMatcher) -> None:
        matches = matcher.match("stress, stress and more stress")
        assert len(matches) == 3
        assert all(m.signal_id == "stress" for m in matches)

    def test_ordered_by_position(self, matcher: SignalMatcher) -> None:
        """Matches come back in order of occurrence, not lexicon order."""
        text = "anxious then overwhelmed then stressed"
        matches = matcher.match(text)

        assert [m.signal_id for m in matches] == ["anxious", "overwhelmed", "stress"]
        assert [m.position for m in matches] == sorted(m.position for m in matches)

    def test_positions_refer_to_source_text(self, matcher: SignalMatcher) -> None:
        """Offsets survive whitespace collapsing and diacritic folding."""
        text = "Wéll,   I   feel ANXIOUS"
        matches = matcher.match(text)

        assert len(matches) == 1
        match = matches[0]
        assert match.position == text.index("ANXIOUS")
        assert match.matched_text == "ANXIOUS"

    def test_typographic_apostrophe_literal(self, matcher: SignalMatcher) -> None:
        matches = matcher.match("I can’t sleep at all")
        assert [m.signal_id for m in matches] == ["cant_sleep"]
        assert matches[0].matched_text == "can’t sleep"

    def test_pattern_signal(self, matcher: SignalMatcher) -> None:
        matches = matcher.match("I keep panicking")
        assert [m.signal_id for m in matches] == ["panic"]
        assert matches[0].category == "panic"
        assert matches[0].weight == 3.0

    def test_matches_carry_definition_fields(self) -> None:
        matcher = SignalMatcher([_literal("alone", "alone", category="isolation", weight=1.5)])
        (match,) = matcher.match("so alone")

        assert match.signal_id == "alone"
        assert match.category == "isolation"
        assert match.weight == 1.5
        assert match.position == 3
