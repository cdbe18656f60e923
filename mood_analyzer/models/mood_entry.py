from __future__ import annotations

from datetime import datetime
from enum import Enum as PyEnum
from typing import List, Optional

from sqlalchemy import JSON, DateTime, Enum, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from mood_analyzer.db.session import Base
from mood_analyzer.utils.emotion_mapping import EmotionCategory


class PeriodType(str, PyEnum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


class MoodEntry(Base):
    __tablename__ = "mood_entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    session_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    period_type: Mapped[PeriodType] = mapped_column(
        Enum(
            PeriodType,
            name="period_type",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
            validate_strings=True,
        ),
        nullable=False,
    )
    mood_id: Mapped[str] = mapped_column(String(50), nullable=False)
    mood_name: Mapped[str] = mapped_column(String(50), nullable=False)
    mood_emoji: Mapped[Optional[str]] = mapped_column(String(16))
    mood_value: Mapped[float] = mapped_column(Float, nullable=False)
    mood_category: Mapped[EmotionCategory] = mapped_column(
        Enum(
            EmotionCategory,
            name="mood_category",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
            validate_strings=True,
        ),
        nullable=False,
    )
    severity_score: Mapped[int] = mapped_column(Integer, nullable=False)
    emotional_labels: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    context_tags: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )
