from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mood_analyzer.core.config import settings
from mood_analyzer.models.assessment_session import AssessmentSession
from mood_analyzer.models.feedback_entry import FeedbackEntry
from mood_analyzer.models.mood_entry import MoodEntry, PeriodType
from mood_analyzer.services.alert_service import AlertService
from mood_analyzer.services.assessment_engine import (
    AssessmentEngine,
    InvalidAssessmentInput,
    MentalHealthAssessment,
)
from mood_analyzer.services.trend_analysis import HistoricalEntry, TrendAnalysis, TrendAnalyzer
from mood_analyzer.utils.crisis_detector import detect_crisis_indicators, extract_keywords
from mood_analyzer.utils.emotion_mapping import (
    calculate_emotional_severity,
    emoji_for,
    map_emotion_to_category,
    resolve_emotion,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    # Stored timestamps are naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _naive_utc(moment: Optional[datetime]) -> datetime:
    if moment is None:
        return _utcnow()
    if moment.tzinfo is not None:
        return moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


class MoodService:
    @staticmethod
    def new_user_id() -> str:
        """Mint an id for a new anonymous user; callers own user identity."""
        return str(uuid.uuid4())

    @staticmethod
    def new_session_id() -> str:
        return str(uuid.uuid4())

    @staticmethod
    def save_mood_entry(
        db: Session,
        *,
        user_id: str,
        period_type: PeriodType,
        mood_id: str,
        session_id: str,
        context_tags: Optional[List[str]] = None,
        created_at: Optional[datetime] = None,
        commit: bool = True,
    ) -> MoodEntry:
        known = map_emotion_to_category(mood_id)
        emotion = resolve_emotion(mood_id)
        timestamp = _naive_utc(created_at)

        entry = MoodEntry(
            id=str(uuid.uuid4()),
            user_id=user_id,
            session_id=session_id,
            period_type=PeriodType(period_type),
            mood_id=mood_id,
            mood_name=emotion.name,
            mood_emoji=emoji_for(mood_id),
            mood_value=emotion.value,
            mood_category=emotion.category,
            severity_score=emotion.severity,
            emotional_labels=list(emotion.keywords),
            context_tags=list(context_tags or []),
            created_at=timestamp,
            updated_at=timestamp,
        )
        if known is None:
            logger.warning("Unknown mood id %r stored with neutral defaults", mood_id)
        db.add(entry)
        if commit:
            db.commit()
            db.refresh(entry)
        else:
            db.flush()
        return entry

    @staticmethod
    def get_mood_history(
        db: Session,
        user_id: str,
        *,
        days: int = settings.HISTORY_DAYS,
        now: Optional[datetime] = None,
    ) -> List[MoodEntry]:
        """Entries of the last `days` days, newest first."""
        start = _naive_utc(now) - timedelta(days=days)
        stmt = (
            select(MoodEntry)
            .where(MoodEntry.user_id == user_id, MoodEntry.created_at >= start)
            .order_by(MoodEntry.created_at.desc())
        )
        return list(db.scalars(stmt))

    @staticmethod
    def history_entries(rows: Iterable[MoodEntry]) -> List[HistoricalEntry]:
        return [
            HistoricalEntry(
                timestamp=row.created_at,
                mood_id=row.mood_id,
                mood_value=row.mood_value,
                mood_name=row.mood_name,
            )
            for row in rows
        ]

    @staticmethod
    def analyze_trends(db: Session, user_id: str, *, now: Optional[datetime] = None) -> TrendAnalysis:
        reference = _naive_utc(now)
        rows = MoodService.get_mood_history(
            db, user_id, days=settings.TREND_LOOKBACK_DAYS, now=reference
        )
        return TrendAnalyzer.analyze(MoodService.history_entries(rows), now=reference)

    @staticmethod
    def save_feedback_entry(
        db: Session,
        *,
        user_id: str,
        session_id: str,
        feedback_content: str,
        period: Optional[str] = None,
        commit: bool = True,
    ) -> Optional[FeedbackEntry]:
        """Store one reflection; blank text is skipped and returns None."""
        if not feedback_content or not feedback_content.strip():
            return None
        entry = FeedbackEntry(
            id=str(uuid.uuid4()),
            user_id=user_id,
            session_id=session_id,
            period_type=period,
            feedback_type="text",
            feedback_content=feedback_content,
            keywords=extract_keywords(feedback_content),
            crisis_indicators=detect_crisis_indicators(feedback_content),
            created_at=_utcnow(),
        )
        db.add(entry)
        if commit:
            db.commit()
            db.refresh(entry)
        else:
            db.flush()
        return entry

    @staticmethod
    def save_assessment_results(
        db: Session,
        *,
        user_id: str,
        session_id: str,
        mood_ids: Iterable[str],
        assessment: MentalHealthAssessment,
        trend: Optional[TrendAnalysis],
        started_at: datetime,
    ) -> AssessmentSession:
        record = AssessmentSession(
            id=str(uuid.uuid4()),
            user_id=user_id,
            session_id=session_id,
            session_type="comprehensive",
            status="completed",
            started_at=started_at,
            completed_at=_utcnow(),
            overall_score=assessment.overall_score,
            risk_assessment=assessment.risk_level.value,
            recommendations=list(assessment.recommendations),
            follow_up_required=assessment.requires_professional_help,
            session_metadata={
                "emotional_severity": calculate_emotional_severity(mood_ids),
                "trends": trend.to_dict() if trend is not None else None,
                "assessment": assessment.to_dict(),
            },
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def get_assessment_history(
        db: Session,
        user_id: str,
        *,
        limit: int = settings.ASSESSMENT_HISTORY_LIMIT,
    ) -> List[AssessmentSession]:
        stmt = (
            select(AssessmentSession)
            .where(AssessmentSession.user_id == user_id)
            .order_by(AssessmentSession.started_at.desc())
            .limit(limit)
        )
        return list(db.scalars(stmt))

    @classmethod
    def perform_comprehensive_assessment(
        cls,
        db: Session,
        *,
        user_id: str,
        current_moods: Mapping[str, str],
        text_feedback: Optional[Mapping[str, str]] = None,
        session_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> MentalHealthAssessment:
        """
        Store the check-in, analyze history and assess.

        Order: save moods -> save feedback -> trend analysis -> assessment ->
        save results -> raise alerts. If storing the check-in or reading
        history fails, the assessment runs without trend data. A failure to
        store the results is logged; alerts are still raised.

        Raises:
            InvalidAssessmentInput: no mood observations were supplied
        """
        if not current_moods:
            raise InvalidAssessmentInput("invalid input: no mood observations")

        text_feedback = dict(text_feedback or {})
        session_id = session_id or cls.new_session_id()
        started_at = _naive_utc(now)
        moods: Dict[str, str] = {PeriodType(p).value: m for p, m in current_moods.items()}
        feedback: Dict[str, str] = {PeriodType(p).value: t for p, t in text_feedback.items()}
        crisis_indicators = [
            keyword for content in feedback.values() for keyword in detect_crisis_indicators(content)
        ]

        trend: Optional[TrendAnalysis] = None
        try:
            for period, mood_id in moods.items():
                cls.save_mood_entry(
                    db,
                    user_id=user_id,
                    period_type=PeriodType(period),
                    mood_id=mood_id,
                    session_id=session_id,
                    created_at=started_at,
                    commit=False,
                )
            for period, content in feedback.items():
                cls.save_feedback_entry(
                    db,
                    user_id=user_id,
                    session_id=session_id,
                    feedback_content=content,
                    period=period,
                    commit=False,
                )
            db.commit()
            trend = cls.analyze_trends(db, user_id, now=started_at)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Trend analysis for user %s unavailable, assessing without history: %s", user_id, exc)

        assessment = AssessmentEngine.assess(moods, feedback, trend)

        try:
            cls.save_assessment_results(
                db,
                user_id=user_id,
                session_id=session_id,
                mood_ids=moods.values(),
                assessment=assessment,
                trend=trend,
                started_at=started_at,
            )
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning("Assessment results for user %s were not stored: %s", user_id, exc)
        else:
            logger.info(
                "Assessment for session %s stored for user %s (risk=%s, urgency=%s)",
                session_id, user_id, assessment.risk_level.value, assessment.urgency_level.value,
            )

        if settings.ALERTS_ENABLED:
            cls._raise_alerts(db, user_id, assessment, trend, crisis_indicators)
        return assessment

    @staticmethod
    def _raise_alerts(
        db: Session,
        user_id: str,
        assessment: MentalHealthAssessment,
        trend: Optional[TrendAnalysis],
        crisis_indicators: List[str],
    ) -> None:
        payloads = AlertService.alerts_for_assessment(user_id, assessment, trend, crisis_indicators)
        try:
            for payload in payloads:
                AlertService.create_alert(db, payload, commit=False)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning("Alert creation failed for user %s: %s", user_id, exc)
