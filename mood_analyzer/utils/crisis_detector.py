"""
Crisis Keyword Detection
========================

Substring matching of free-text reflections against fixed crisis phrase lists.
No NLP model is involved: reflections are lowercased and scanned as-is.

Two lists exist:
- ASSESSMENT_CRISIS_KEYWORDS drive the assessment engine's crisis flag.
- FEEDBACK_CRISIS_KEYWORDS are recorded per stored feedback entry so the
  history shows which phrases were present.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Mapping, Optional

# =============================================================================
# KEYWORD LISTS
# =============================================================================

ASSESSMENT_CRISIS_KEYWORDS = [
    "hopeless",
    "worthless",
    "suicide",
    "self-harm",
    "end it all",
    "no point",
    "better off dead",
    "can't go on",
]

FEEDBACK_CRISIS_KEYWORDS = [
    "suicide",
    "kill myself",
    "end it all",
    "hopeless",
    "worthless",
    "self-harm",
    "hurt myself",
    "no point",
    "better off dead",
]

KEYWORD_MIN_LENGTH = 4
KEYWORD_LIMIT = 10

_NON_WORD = re.compile(r"\W+")


# =============================================================================
# HELPERS
# =============================================================================

def combine_reflections(text_feedback: Optional[Mapping[str, str]]) -> str:
    """Join every period's reflection into one lowercase haystack."""
    if not text_feedback:
        return ""
    return " ".join(text_feedback.values()).lower()


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def detect_crisis_indicators(text: str) -> List[str]:
    """Return the feedback crisis phrases present in text, in list order."""
    lowered = text.lower()
    return [keyword for keyword in FEEDBACK_CRISIS_KEYWORDS if keyword in lowered]


def extract_keywords(text: str) -> List[str]:
    """First ten lowercase words longer than three characters."""
    words = [w for w in _NON_WORD.split(text.lower()) if len(w) >= KEYWORD_MIN_LENGTH]
    return words[:KEYWORD_LIMIT]
