"""
Text Normalizer

Normalizes message text before lexicon matching so that case,
diacritics and typographic variants do not cause false negatives.

Every normalized character keeps the offset of the source character
it came from, so match positions can be reported against the
original message.
"""

import re
import unicodedata
from dataclasses import dataclass

# Invisible characters removed before matching
STRIP_CHARS: frozenset[str] = frozenset({
    "\u200b",  # Zero-width space
    "\u200c",  # Zero-width non-joiner
    "\u200d",  # Zero-width joiner
    "\ufeff",  # Byte order mark
    "\u00ad",  # Soft hyphen
    "\u2060",  # Word joiner
})

# Typographic apostrophes and quotes folded to ASCII
APOSTROPHES: frozenset[str] = frozenset({
    "\u2018",
    "\u2019",
    "\u02bc",
    "\u2032",
    "`",
})


@dataclass(frozen=True)
class NormalizedText:
    """
    Normalized text with an offset map into the source.

    Attributes:
        source: Original text
        text: Normalized text used for matching
        offsets: offsets[i] is the source index of text[i]
    """

    source: str
    text: str
    offsets: tuple[int, ...]

    def source_span(self, start: int, end: int) -> tuple[int, int]:
        """Map a normalized [start, end) span to a source span."""
        if start >= end:
            pos = self.offsets[start] if start < len(self.offsets) else len(self.source)
            return pos, pos
        return self.offsets[start], self.offsets[end - 1] + 1


class TextNormalizer:
    """
    Unicode normalizer for safety scanning.

    Applies, per source character:
    1. Strip zero-width / invisible characters and stray combining marks
    2. Fold typographic apostrophes to "'"
    3. NFKD decomposition, dropping combining marks (é → e, ｆ → f)
    4. Casefold
    5. Collapse whitespace runs to a single space
    """

    def normalize(self, text: str) -> NormalizedText:
        """
        Normalize text for pattern matching.

        Args:
            text: Raw input text

        Returns:
            NormalizedText with offset map
        """
        if not text:
            return NormalizedText(source=text or "", text="", offsets=())

        out: list[str] = []
        offsets: list[int] = []
        last_was_space = True  # also trims leading whitespace

        for index, char in enumerate(text):
            if char in STRIP_CHARS or _is_combining(char):
                continue

            if char.isspace():
                if not last_was_space:
                    out.append(" ")
                    offsets.append(index)
                    last_was_space = True
                continue

            for piece in self._fold(char):
                out.append(piece)
                offsets.append(index)
            last_was_space = False

        # Trailing space
        if out and out[-1] == " ":
            out.pop()
            offsets.pop()

        return NormalizedText(source=text, text="".join(out), offsets=tuple(offsets))

    def normalize_term(self, term: str) -> str:
        """Normalize a lexicon term with the same rules as message text."""
        return self.normalize(term).text

    def normalize_pattern(self, pattern: str) -> str:
        """
        Fold the literal characters of a regex source.

        Only non-ASCII characters and typographic apostrophes are
        folded. ASCII is left alone so escapes like \\S, \\W and \\B keep
        their meaning; case is handled by re.IGNORECASE.

        Args:
            pattern: Regex source from the lexicon

        Returns:
            Regex source that can match normalized text
        """
        out: list[str] = []
        for char in pattern:
            if char in STRIP_CHARS or _is_combining(char):
                continue
            if char.isascii() and char not in APOSTROPHES:
                out.append(char)
            else:
                # Folding can yield metacharacters (fullwidth ＊ -> *)
                out.append(re.escape(self._fold(char)))
        return "".join(out)

    @staticmethod
    def _fold(char: str) -> str:
        if char in APOSTROPHES:
            return "'"
        decomposed = unicodedata.normalize("NFKD", char)
        stripped = "".join(
            c for c in decomposed if unicodedata.category(c) != "Mn"
        )
        return (stripped or char).casefold()


def _is_combining(char: str) -> bool:
    return unicodedata.category(char) == "Mn"
