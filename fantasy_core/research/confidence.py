"""
Lexical confidence scoring for research answers.

This is a heuristic, not a calibrated probability. It reads hedging and
certainty words in the answer text:
- Base: 0.70
- +0.05 for each distinct high-certainty marker present
- -0.05 for each distinct low-certainty marker present
- Clamped to [0.30, 1.00]

A marker counts once no matter how often it appears. Matching is a
case-insensitive substring test, so "clearly" counts as "clear".
"""

BASE_CONFIDENCE = 0.70
MARKER_WEIGHT = 0.05
MIN_CONFIDENCE = 0.30
MAX_CONFIDENCE = 1.00

HIGH_CONFIDENCE_MARKERS: tuple[str, ...] = (
    "definitely",
    "certainly",
    "strongly",
    "clear",
    "obvious",
)

LOW_CONFIDENCE_MARKERS: tuple[str, ...] = (
    "might",
    "could",
    "possibly",
    "perhaps",
    "uncertain",
)


def score_confidence(content: str) -> float:
    """
    Score how certain a research answer sounds.

    Args:
        content: Raw answer text

    Returns:
        Confidence in [0.30, 1.00], rounded to two decimals so identical
        text always yields an identical, comparable score
    """
    text = (content or "").lower()

    high_hits = sum(1 for marker in HIGH_CONFIDENCE_MARKERS if marker in text)
    low_hits = sum(1 for marker in LOW_CONFIDENCE_MARKERS if marker in text)

    confidence = BASE_CONFIDENCE + MARKER_WEIGHT * (high_hits - low_hits)
    return round(max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, confidence)), 2)
