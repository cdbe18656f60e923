from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from mood_analyzer.models.mood_entry import PeriodType
from mood_analyzer.utils.emotion_mapping import EmotionCategory


class EmotionOut(BaseModel):
    id: str
    name: str
    category: str
    value: int
    severity: int
    keywords: List[str]
    emoji: str


class MoodEntryBase(BaseModel):
    period_type: PeriodType
    mood_id: str
    mood_name: str
    mood_emoji: Optional[str] = None
    mood_value: float
    mood_category: EmotionCategory
    severity_score: int
    emotional_labels: List[str] = []
    context_tags: List[str] = []


class MoodEntry(MoodEntryBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    session_id: str
    created_at: datetime
    updated_at: datetime
