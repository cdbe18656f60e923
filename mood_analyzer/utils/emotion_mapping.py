from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple


class EmotionCategory(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    CONCERNING = "concerning"


@dataclass(frozen=True, slots=True)
class EmotionDescriptor:
    """Semantic attributes of one selectable emotion."""
    id: str
    name: str
    category: EmotionCategory
    value: int  # 1..5, higher = more positive affect
    severity: int  # 1..5, higher = more clinically concerning
    keywords: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "value": self.value,
            "severity": self.severity,
            "keywords": list(self.keywords),
        }


# Ordered most positive -> most negative
EMOTION_MAPPINGS: Tuple[EmotionDescriptor, ...] = (
    EmotionDescriptor("ecstatic", "Ecstatic", EmotionCategory.POSITIVE, 5, 1,
                      ("extremely happy", "overjoyed", "euphoric", "elated")),
    EmotionDescriptor("joyful", "Joyful", EmotionCategory.POSITIVE, 5, 1,
                      ("happy", "cheerful", "delighted", "pleased")),
    EmotionDescriptor("content", "Content", EmotionCategory.POSITIVE, 4, 1,
                      ("satisfied", "peaceful", "fulfilled", "serene")),
    EmotionDescriptor("calm", "Calm", EmotionCategory.POSITIVE, 4, 1,
                      ("relaxed", "tranquil", "composed", "centered")),
    EmotionDescriptor("neutral", "Neutral", EmotionCategory.NEUTRAL, 3, 2,
                      ("okay", "fine", "average", "indifferent")),
    EmotionDescriptor("confused", "Confused", EmotionCategory.NEGATIVE, 2, 3,
                      ("uncertain", "puzzled", "bewildered", "lost")),
    EmotionDescriptor("tired", "Tired", EmotionCategory.NEGATIVE, 2, 3,
                      ("exhausted", "drained", "fatigued", "weary")),
    EmotionDescriptor("worried", "Worried", EmotionCategory.NEGATIVE, 2, 3,
                      ("concerned", "troubled", "uneasy", "apprehensive")),
    EmotionDescriptor("anxious", "Anxious", EmotionCategory.CONCERNING, 1, 4,
                      ("nervous", "stressed", "panicked", "restless")),
    EmotionDescriptor("sad", "Sad", EmotionCategory.CONCERNING, 1, 4,
                      ("depressed", "melancholic", "down", "blue")),
    EmotionDescriptor("angry", "Angry", EmotionCategory.CONCERNING, 1, 4,
                      ("furious", "irritated", "frustrated", "enraged")),
    EmotionDescriptor("devastated", "Devastated", EmotionCategory.CONCERNING, 1, 5,
                      ("heartbroken", "shattered", "crushed", "hopeless")),
)

_BY_ID: Dict[str, EmotionDescriptor] = {m.id: m for m in EMOTION_MAPPINGS}

# Fallback for ids the table does not know; an unknown id never aborts an assessment
DEFAULT_VALUE = 3
DEFAULT_SEVERITY = 3
DEFAULT_EMOTION = EmotionDescriptor(
    id="unknown",
    name="Unknown",
    category=EmotionCategory.NEUTRAL,
    value=DEFAULT_VALUE,
    severity=DEFAULT_SEVERITY,
)

MOOD_EMOJI: Dict[str, str] = {
    "ecstatic": "😄",
    "joyful": "😊",
    "content": "😌",
    "calm": "😐",
    "neutral": "😑",
    "confused": "😕",
    "tired": "😴",
    "worried": "😟",
    "anxious": "😰",
    "sad": "😢",
    "angry": "😠",
    "devastated": "😭",
}
DEFAULT_EMOJI = "😐"


def map_emotion_to_category(mood_id: str) -> Optional[EmotionDescriptor]:
    return _BY_ID.get(mood_id)


def resolve_emotion(mood_id: str) -> EmotionDescriptor:
    """Lookup that substitutes the neutral default for unknown ids."""
    return _BY_ID.get(mood_id, DEFAULT_EMOTION)


def mood_to_value(mood_id: str) -> int:
    return resolve_emotion(mood_id).value


def mood_to_severity(mood_id: str) -> int:
    return resolve_emotion(mood_id).severity


def emoji_for(mood_id: str) -> str:
    return MOOD_EMOJI.get(mood_id, DEFAULT_EMOJI)


def calculate_emotional_severity(mood_ids: Iterable[str]) -> int:
    """Mean severity of the given moods, rounded half-up to a whole level."""
    severities = [mood_to_severity(mood_id) for mood_id in mood_ids]
    if not severities:
        raise ValueError("calculate_emotional_severity: no mood ids given")
    return math.floor(sum(severities) / len(severities) + 0.5)
