"""
Lexicon Loader

Loads, validates and compiles the signal lexicon.

SAFETY-CRITICAL: A lexicon that cannot be loaded completely is a
fatal startup error. The service must refuse to run with a partial
crisis vocabulary, so every problem here raises LexiconConfigError.
"""

import json
import re
from pathlib import Path
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from calmline.config.logging_config import get_logger
from calmline.config.settings import DetectorSettings
from calmline.domain.enums.risk_tier import SignalKind
from calmline.domain.models.risk_models import TierThresholds
from calmline.domain.models.signals import Lexicon, SignalDefinition
from calmline.services.detection.default_lexicon import DEFAULT_LEXICON
from calmline.services.detection.signal_matcher import compile_signal_regex
from calmline.services.detection.text_normalizer import TextNormalizer

logger = get_logger(__name__)


class LexiconConfigError(Exception):
    """Lexicon could not be loaded or failed validation."""

    def __init__(self, message: str, source: str = "builtin") -> None:
        super().__init__(f"{message} (source: {source})")
        self.source = source


class SignalEntry(BaseModel):
    """One signal as written in the lexicon file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1, max_length=64, pattern=r"^[a-z0-9_]+$")
    kind: SignalKind = SignalKind.LITERAL
    term: str = Field(min_length=1, max_length=500)
    category: str = Field(min_length=1, max_length=64, pattern=r"^[a-z0-9_]+$")
    weight: float = Field(gt=0, le=100, allow_inf_nan=False)


class ThresholdEntry(BaseModel):
    """Tier cut points as written in the lexicon file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    low: float = Field(gt=0, allow_inf_nan=False)
    moderate: float = Field(gt=0, allow_inf_nan=False)
    high: float = Field(gt=0, allow_inf_nan=False)
    critical: float = Field(gt=0, allow_inf_nan=False)

    @model_validator(mode="after")
    def validate_order(self) -> "ThresholdEntry":
        if not self.low < self.moderate < self.high < self.critical:
            raise ValueError("thresholds must satisfy low < moderate < high < critical")
        return self


class LexiconDocument(BaseModel):
    """Top-level lexicon file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    version: str = Field(default="unversioned", min_length=1, max_length=100)
    repeat_decay: Optional[float] = Field(default=None, ge=0.0, lt=1.0, allow_inf_nan=False)
    thresholds: Optional[ThresholdEntry] = None
    signals: list[SignalEntry] = Field(min_length=1)

    @field_validator("signals")
    @classmethod
    def validate_unique_ids(cls, signals: list[SignalEntry]) -> list[SignalEntry]:
        seen: set[str] = set()
        duplicates: set[str] = set()
        for signal in signals:
            if signal.id in seen:
                duplicates.add(signal.id)
            seen.add(signal.id)
        if duplicates:
            raise ValueError(f"duplicate signal ids: {', '.join(sorted(duplicates))}")
        return signals


def build_lexicon(
    raw: Any,
    settings: Optional[DetectorSettings] = None,
    source: str = "builtin",
) -> Lexicon:
    """
    Validate a lexicon document and compile it.

    Thresholds and repeat decay come from the document when present,
    otherwise from settings.

    Args:
        raw: Parsed lexicon document (dict)
        settings: Detector settings for policy defaults
        source: Label used in errors and logs

    Returns:
        Immutable Lexicon

    Raises:
        LexiconConfigError: Validation or compilation failure
    """
    settings = settings or DetectorSettings()

    try:
        document = LexiconDocument.model_validate(raw)
    except ValidationError as e:
        raise LexiconConfigError(f"Invalid lexicon: {e}", source=source) from e

    normalizer = TextNormalizer()
    signals: list[SignalDefinition] = []
    for entry in document.signals:
        try:
            regex = compile_signal_regex(entry.kind, entry.term, normalizer)
        except (re.error, ValueError) as e:
            raise LexiconConfigError(
                f"Signal {entry.id!r} has an unusable term: {e}", source=source
            ) from e

        if regex.fullmatch(""):
            raise LexiconConfigError(
                f"Signal {entry.id!r} matches empty text", source=source
            )

        signals.append(SignalDefinition(
            signal_id=entry.id,
            kind=entry.kind,
            term=entry.term,
            category=entry.category,
            weight=entry.weight,
            regex=regex,
        ))

    if document.thresholds is not None:
        cuts = document.thresholds
    else:
        cuts = ThresholdEntry(
            low=settings.tier_low,
            moderate=settings.tier_moderate,
            high=settings.tier_high,
            critical=settings.tier_critical,
        )

    repeat_decay = (
        document.repeat_decay
        if document.repeat_decay is not None
        else settings.repeat_decay
    )

    return Lexicon(
        version=document.version,
        signals=tuple(signals),
        thresholds=TierThresholds(
            low=cuts.low,
            moderate=cuts.moderate,
            high=cuts.high,
            critical=cuts.critical,
        ),
        repeat_decay=repeat_decay,
    )


def read_lexicon_file(path: Path) -> Any:
    """
    Read and parse a JSON lexicon file.

    Raises:
        LexiconConfigError: File missing, unreadable or not JSON
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LexiconConfigError(f"Cannot read lexicon file: {e}", source=str(path)) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise LexiconConfigError(f"Lexicon file is not valid JSON: {e}", source=str(path)) from e


def load_lexicon(settings: Optional[DetectorSettings] = None) -> Lexicon:
    """
    Load the lexicon configured for this process.

    Uses settings.lexicon_path when set, otherwise the built-in lexicon.

    Args:
        settings: Detector settings

    Returns:
        Immutable Lexicon

    Raises:
        LexiconConfigError: Any load or validation failure
    """
    settings = settings or DetectorSettings()

    if settings.lexicon_path is not None:
        source = str(settings.lexicon_path)
        raw = read_lexicon_file(settings.lexicon_path)
    else:
        source = "builtin"
        raw = DEFAULT_LEXICON

    lexicon = build_lexicon(raw, settings=settings, source=source)

    logger.info(
        "Lexicon loaded",
        source=source,
        lexicon_version=lexicon.version,
        signal_count=len(lexicon),
        category_count=len(lexicon.categories),
        thresholds=lexicon.thresholds.to_dict(),
        repeat_decay=lexicon.repeat_decay,
    )

    return lexicon
