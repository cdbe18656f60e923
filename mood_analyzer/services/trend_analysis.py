"""
Historical mood trend analysis.

Partitions a user's stored mood entries into 7/30/90-day windows, computes
per-window statistics and risk factors, and derives an overall trend
direction, a risk level and follow-up recommendations.

The analyzer is a pure function of (entries, now). Callers supply entries
already limited to the lookback window, newest first.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)


class RiskLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class TrendDirection(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"
    CONCERNING = "concerning"


# Configuration
SHORT_TERM_DAYS = 7
MEDIUM_TERM_DAYS = 30
LONG_TERM_DAYS = 90

SHORT_TERM_LABEL = "Last 7 days"
MEDIUM_TERM_LABEL = "Last 30 days"
LONG_TERM_LABEL = "Last 90 days"

NEUTRAL_BASELINE = 3
NEUTRAL_EMOTION = "neutral"

CONCERNING_MOOD_IDS = {"anxious", "sad", "angry", "devastated"}
DECLINE_MARGIN = 0.5

RISK_HIGH_FREQUENCY = "High frequency of negative emotions"
RISK_DECLINING = "Declining mood trend"
RISK_SEVERE_DISTRESS = "Presence of severe emotional distress"

RECOMMENDATIONS_URGENT = [
    "Consider seeking immediate professional mental health support",
    "Contact a crisis helpline if experiencing thoughts of self-harm",
    "Reach out to trusted friends or family members",
]
RECOMMENDATIONS_DECLINING = [
    "Schedule an appointment with a mental health professional",
    "Practice daily mindfulness or meditation",
    "Maintain regular sleep and exercise routines",
]
RECOMMENDATIONS_ANXIOUS = [
    "Try deep breathing exercises and progressive muscle relaxation",
    "Limit caffeine intake and practice grounding techniques",
]
RECOMMENDATIONS_SAD = [
    "Engage in activities that bring you joy",
    "Consider light therapy and maintain social connections",
]
RECOMMENDATIONS_IMPROVING = [
    "Continue current positive coping strategies",
    "Maintain healthy lifestyle habits that support your progress",
]
RECOMMENDATIONS_MAINTENANCE = [
    "Continue monitoring your emotional well-being",
    "Practice regular self-care activities",
    "Maintain healthy social connections",
]
RECOMMENDATION_START_TRACKING = "Start tracking your mood regularly to build meaningful insights"


def round_score(value: float) -> float:
    """Round half-up to two decimals."""
    return math.floor(value * 100 + 0.5) / 100


def _as_utc(moment: datetime) -> datetime:
    # Stored timestamps are naive UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@dataclass(frozen=True, slots=True)
class HistoricalEntry:
    timestamp: datetime
    mood_id: str
    mood_value: float
    mood_name: str


@dataclass(slots=True)
class TrendWindow:
    period: str
    average_score: float = NEUTRAL_BASELINE
    dominant_emotion: str = NEUTRAL_EMOTION
    emotion_count: Dict[str, int] = field(default_factory=dict)
    risk_factors: List[str] = field(default_factory=list)


@dataclass(slots=True)
class TrendAnalysis:
    short_term: TrendWindow
    medium_term: TrendWindow
    long_term: TrendWindow
    overall_trend: TrendDirection
    risk_level: RiskLevel
    recommendations: List[str] = field(default_factory=list)

    @property
    def total_risk_factors(self) -> int:
        return (
            len(self.short_term.risk_factors)
            + len(self.medium_term.risk_factors)
            + len(self.long_term.risk_factors)
        )

    def to_dict(self) -> Dict[str, object]:
        d = asdict(self)
        d["overall_trend"] = self.overall_trend.value
        d["risk_level"] = self.risk_level.value
        return d


class TrendAnalyzer:
    """Derives a TrendAnalysis from materialized mood history."""

    @classmethod
    def analyze(
        cls,
        entries: Sequence[HistoricalEntry],
        now: Optional[datetime] = None,
    ) -> TrendAnalysis:
        """
        Analyze mood history across short, medium and long windows.

        Args:
            entries: Historical entries ordered newest first
            now: Reference time for window partitioning (defaults to UTC now)

        Returns:
            TrendAnalysis; the canonical default when entries is empty
        """
        if not entries:
            return cls.default_analysis()

        reference = _as_utc(now or datetime.now(timezone.utc))
        seven_days_ago = reference - timedelta(days=SHORT_TERM_DAYS)
        thirty_days_ago = reference - timedelta(days=MEDIUM_TERM_DAYS)

        short_entries = [e for e in entries if _as_utc(e.timestamp) > seven_days_ago]
        medium_entries = [e for e in entries if _as_utc(e.timestamp) > thirty_days_ago]

        short_term = cls.analyze_window(short_entries, SHORT_TERM_LABEL)
        medium_term = cls.analyze_window(medium_entries, MEDIUM_TERM_LABEL)
        long_term = cls.analyze_window(list(entries), LONG_TERM_LABEL)

        overall_trend = cls.determine_overall_trend(short_term, medium_term, long_term)
        risk_level = cls.assess_risk_level(short_term, medium_term, long_term)
        recommendations = cls.generate_recommendations(risk_level, overall_trend, short_term)

        logger.debug(
            "trend analysis: entries=%d short=%d medium=%d trend=%s risk=%s",
            len(entries), len(short_entries), len(medium_entries),
            overall_trend.value, risk_level.value,
        )
        return TrendAnalysis(
            short_term=short_term,
            medium_term=medium_term,
            long_term=long_term,
            overall_trend=overall_trend,
            risk_level=risk_level,
            recommendations=recommendations,
        )

    @classmethod
    def analyze_window(cls, entries: Sequence[HistoricalEntry], period: str) -> TrendWindow:
        if not entries:
            return TrendWindow(period=period)

        average = sum(e.mood_value for e in entries) / len(entries)

        emotion_count: Dict[str, int] = {}
        for e in entries:
            emotion_count[e.mood_name] = emotion_count.get(e.mood_name, 0) + 1
        # max() keeps the first maximal key, i.e. the first name encountered
        dominant = max(emotion_count, key=emotion_count.get)

        return TrendWindow(
            period=period,
            average_score=round_score(average),
            dominant_emotion=dominant,
            emotion_count=emotion_count,
            risk_factors=cls.identify_risk_factors(entries),
        )

    @staticmethod
    def identify_risk_factors(entries: Sequence[HistoricalEntry]) -> List[str]:
        risk_factors: List[str] = []

        concerning = [e for e in entries if e.mood_id in CONCERNING_MOOD_IDS]
        if len(concerning) > len(entries) * 0.5:
            risk_factors.append(RISK_HIGH_FREQUENCY)

        # Input is newest first, so the head of the list is the recent half
        split = math.ceil(len(entries) / 2)
        recent, older = entries[:split], entries[split:]
        if recent and older:
            recent_avg = sum(e.mood_value for e in recent) / len(recent)
            older_avg = sum(e.mood_value for e in older) / len(older)
            if recent_avg < older_avg - DECLINE_MARGIN:
                risk_factors.append(RISK_DECLINING)

        if any(e.mood_value == 1 or e.mood_id == "devastated" for e in entries):
            risk_factors.append(RISK_SEVERE_DISTRESS)

        return risk_factors

    @staticmethod
    def determine_overall_trend(
        short_term: TrendWindow,
        medium_term: TrendWindow,
        long_term: TrendWindow,
    ) -> TrendDirection:
        short_score = short_term.average_score
        medium_score = medium_term.average_score
        long_score = long_term.average_score

        if short_score <= 2 or len(short_term.risk_factors) >= 2:
            return TrendDirection.CONCERNING
        if short_score > medium_score and medium_score >= long_score:
            return TrendDirection.IMPROVING
        if short_score < medium_score and medium_score <= long_score:
            return TrendDirection.DECLINING
        return TrendDirection.STABLE

    @staticmethod
    def assess_risk_level(
        short_term: TrendWindow,
        medium_term: TrendWindow,
        long_term: TrendWindow,
    ) -> RiskLevel:
        total = (
            len(short_term.risk_factors)
            + len(medium_term.risk_factors)
            + len(long_term.risk_factors)
        )
        if short_term.average_score <= 1.5 or total >= 4:
            return RiskLevel.HIGH
        if short_term.average_score <= 2.5 or total >= 2:
            return RiskLevel.MODERATE
        return RiskLevel.LOW

    @staticmethod
    def generate_recommendations(
        risk_level: RiskLevel,
        trend: TrendDirection,
        short_term: TrendWindow,
    ) -> List[str]:
        recommendations: List[str] = []
        # Stored names are display names ("Anxious"); compare by id
        dominant = short_term.dominant_emotion.lower()

        if risk_level == RiskLevel.HIGH or trend == TrendDirection.CONCERNING:
            recommendations.extend(RECOMMENDATIONS_URGENT)
        if risk_level == RiskLevel.MODERATE or trend == TrendDirection.DECLINING:
            recommendations.extend(RECOMMENDATIONS_DECLINING)
        if dominant == "anxious":
            recommendations.extend(RECOMMENDATIONS_ANXIOUS)
        if dominant == "sad":
            recommendations.extend(RECOMMENDATIONS_SAD)
        if trend == TrendDirection.IMPROVING:
            recommendations.extend(RECOMMENDATIONS_IMPROVING)

        if not recommendations:
            recommendations.extend(RECOMMENDATIONS_MAINTENANCE)
        return recommendations

    @staticmethod
    def default_analysis() -> TrendAnalysis:
        return TrendAnalysis(
            short_term=TrendWindow(period=SHORT_TERM_LABEL),
            medium_term=TrendWindow(period=MEDIUM_TERM_LABEL),
            long_term=TrendWindow(period=LONG_TERM_LABEL),
            overall_trend=TrendDirection.STABLE,
            risk_level=RiskLevel.LOW,
            recommendations=[RECOMMENDATION_START_TRACKING],
        )
