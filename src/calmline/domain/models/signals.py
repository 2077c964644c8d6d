"""
Signal Models

Lexicon entries and the matches they produce.

SAFETY-CRITICAL: The lexicon is the detector's entire vocabulary.
It is built once at startup and never mutated afterwards.
"""

import re
from dataclasses import dataclass, field

from calmline.domain.enums.risk_tier import SignalKind
from calmline.domain.models.risk_models import TierThresholds


@dataclass(frozen=True)
class SignalDefinition:
    """
    A single lexicon entry.

    Attributes:
        signal_id: Unique identifier (e.g. "overwhelmed")
        kind: Literal term or regular expression
        term: The literal word/phrase or the pattern source
        category: Distress category (anxiety, panic, despair, ...)
        weight: Severity contribution, strictly positive
        regex: Compiled matcher for normalized text
    """

    signal_id: str
    kind: SignalKind
    term: str
    category: str
    weight: float
    regex: re.Pattern = field(compare=False, repr=False)


@dataclass(frozen=True)
class SignalMatch:
    """
    One occurrence of a signal in a message.

    Created per detection pass and discarded after scoring.

    Attributes:
        signal_id: Matched definition id
        category: Category of the definition
        weight: Weight of the definition
        position: Offset of the match in the source text
        matched_text: Source-text slice that matched
    """

    signal_id: str
    category: str
    weight: float
    position: int
    matched_text: str = ""

    def to_dict(self) -> dict:
        return {
            "signal_id": self.signal_id,
            "category": self.category,
            "weight": self.weight,
            "position": self.position,
        }


@dataclass(frozen=True)
class Lexicon:
    """
    Immutable signal table plus the scoring policy it was reviewed with.

    Attributes:
        version: Lexicon version label for audit
        signals: Signal definitions in load order
        thresholds: Tier cut points
        repeat_decay: Factor applied to repeated matches in a category
    """

    version: str
    signals: tuple[SignalDefinition, ...]
    thresholds: TierThresholds
    repeat_decay: float = 0.5

    @property
    def categories(self) -> frozenset[str]:
        return frozenset(s.category for s in self.signals)

    def __len__(self) -> int:
        return len(self.signals)
