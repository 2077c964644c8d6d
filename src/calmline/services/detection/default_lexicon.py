"""
Built-in Lexicon

Used when CALMLINE_DETECTOR_LEXICON_PATH is not set. Same shape as
the JSON lexicon file so both go through one validation path.

CLINICAL_REVIEW_REQUIRED: Terms, categories and weights are
placeholders pending clinical review. Deployments should point
CALMLINE_DETECTOR_LEXICON_PATH at a reviewed file.

Weight guide (default thresholds):
    1-2   everyday stress and worry
    3-4   panic, despair
    6-8   indirect self-harm language (HIGH on its own)
    10    direct crisis language (CRITICAL on its own)
"""

DEFAULT_LEXICON: dict = {
    "version": "builtin-2026.10",
    "signals": [
        # Stress
        {"id": "stress", "term": "stress", "category": "stress", "weight": 1.0},
        {"id": "overwhelmed", "term": "overwhelm", "category": "stress", "weight": 2.0},
        {"id": "exhausted", "term": "exhausted", "category": "stress", "weight": 1.0},
        {
            "id": "burned_out",
            "kind": "pattern",
            "term": r"\bburn(?:ed|t)\s+out\b|\bburnout\b",
            "category": "stress",
            "weight": 1.5,
        },
        # Anxiety
        {"id": "anxious", "term": "anxious", "category": "anxiety", "weight": 2.0},
        {"id": "anxiety", "term": "anxiety", "category": "anxiety", "weight": 2.0},
        {"id": "worried", "term": "worried", "category": "anxiety", "weight": 1.0},
        {"id": "nervous", "term": "nervous", "category": "anxiety", "weight": 1.0},
        # Panic
        {
            "id": "panic",
            "kind": "pattern",
            "term": r"\bpanic(?:s|ky|ked|king)?\b",
            "category": "panic",
            "weight": 3.0,
        },
        {
            "id": "cant_breathe",
            "kind": "pattern",
            "term": r"\bcan'?t\s+breathe\b|\bcannot\s+breathe\b",
            "category": "panic",
            "weight": 3.0,
        },
        # Sleep
        {"id": "insomnia", "term": "insomnia", "category": "sleep", "weight": 1.0},
        {
            "id": "cant_sleep",
            "kind": "pattern",
            "term": r"\bcan'?t\s+sleep\b|\bcannot\s+sleep\b",
            "category": "sleep",
            "weight": 1.0,
        },
        # Isolation
        {"id": "lonely", "term": "lonely", "category": "isolation", "weight": 1.5},
        {
            "id": "nobody_cares",
            "kind": "pattern",
            "term": r"\b(?:nobody|no one|no-one)\s+cares\b",
            "category": "isolation",
            "weight": 3.0,
        },
        # Despair
        {"id": "hopeless", "term": "hopeless", "category": "despair", "weight": 4.0},
        {"id": "worthless", "term": "worthless", "category": "despair", "weight": 4.0},
        {"id": "empty_inside", "term": "empty inside", "category": "despair", "weight": 3.0},
        {
            "id": "no_way_out",
            "kind": "pattern",
            "term": r"\bno\s+way\s+out\b|\bcan'?t\s+go\s+on\b",
            "category": "despair",
            "weight": 4.0,
        },
        {
            "id": "better_off_without_me",
            "kind": "pattern",
            "term": r"\bbetter\s+off\s+without\s+me\b",
            "category": "self_harm",
            "weight": 6.0,
        },
        # Self-harm
        {
            "id": "self_harm",
            "kind": "pattern",
            "term": r"\bself[\s-]?harm(?:ing)?\b|\bhurt(?:ing)?\s+myself\b|\bcut(?:ting)?\s+myself\b",
            "category": "self_harm",
            "weight": 8.0,
        },
        # Crisis
        {
            "id": "suicide",
            "kind": "pattern",
            "term": r"\bsuicid(?:e|al|ality)\b",
            "category": "crisis",
            "weight": 10.0,
        },
        {
            "id": "kill_myself",
            "kind": "pattern",
            "term": r"\bkill(?:ing)?\s+myself\b",
            "category": "crisis",
            "weight": 10.0,
        },
        {
            "id": "end_my_life",
            "kind": "pattern",
            "term": r"\bend\s+(?:my\s+life|it\s+all)\b",
            "category": "crisis",
            "weight": 10.0,
        },
        {
            "id": "want_to_die",
            "kind": "pattern",
            "term": r"\bwant\s+to\s+die\b|\bno\s+reason\s+to\s+live\b",
            "category": "crisis",
            "weight": 10.0,
        },
    ],
}
