"""
Mental Health Alert Service

Alerts are raised after a comprehensive assessment when:
1. Crisis language is present or urgency is immediate
2. The historical trend is concerning or declining
3. The historical trend is improving (positive alert)

Alerts stay active until resolved explicitly.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from mood_analyzer.models.mental_health_alert import AlertSeverity, AlertType, MentalHealthAlert
from mood_analyzer.schemas.alert import AlertCreate
from mood_analyzer.services.assessment_engine import MentalHealthAssessment, UrgencyLevel
from mood_analyzer.services.trend_analysis import TrendAnalysis, TrendDirection

logger = logging.getLogger(__name__)

REFERRAL_SEVERITIES = {AlertSeverity.HIGH, AlertSeverity.CRITICAL}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class AlertNotFound(ValueError):
    """Raised when an alert id does not exist."""


class AlertService:
    @staticmethod
    def list_active_alerts(db: Session, user_id: str, *, limit: int = 100) -> List[MentalHealthAlert]:
        stmt = (
            select(MentalHealthAlert)
            .where(
                MentalHealthAlert.user_id == user_id,
                MentalHealthAlert.resolved.is_(False),
            )
            .order_by(MentalHealthAlert.created_at.desc())
            .limit(limit)
        )
        return list(db.scalars(stmt))

    @staticmethod
    def get_alert(db: Session, alert_id: str) -> Optional[MentalHealthAlert]:
        return db.get(MentalHealthAlert, alert_id)

    @staticmethod
    def create_alert(db: Session, alert_in: AlertCreate, *, commit: bool = True) -> MentalHealthAlert:
        alert = MentalHealthAlert(
            id=str(uuid.uuid4()),
            **alert_in.model_dump(),
            professional_referral_needed=alert_in.severity_level in REFERRAL_SEVERITIES,
            crisis_intervention_required=alert_in.alert_type == AlertType.CRISIS,
            created_at=_utcnow(),
        )
        db.add(alert)
        if commit:
            db.commit()
            db.refresh(alert)
        else:
            db.flush()
        logger.info(
            "Alert %s created for user %s (%s/%s)",
            alert.id, alert.user_id, alert.alert_type.value, alert.severity_level.value,
        )
        return alert

    @staticmethod
    def resolve_alert(db: Session, alert_id: str, *, commit: bool = True) -> MentalHealthAlert:
        alert = AlertService.get_alert(db, alert_id)
        if alert is None:
            raise AlertNotFound(f"Alert {alert_id} not found")
        alert.resolved = True
        alert.resolved_at = _utcnow()
        db.add(alert)
        if commit:
            db.commit()
            db.refresh(alert)
        else:
            db.flush()
        return alert

    @staticmethod
    def alerts_for_assessment(
        user_id: str,
        assessment: MentalHealthAssessment,
        trend: Optional[TrendAnalysis],
        crisis_indicators: List[str],
    ) -> List[AlertCreate]:
        """Decide which alerts an assessment warrants. Pure; nothing is stored."""
        alerts: List[AlertCreate] = []
        snapshot: Dict[str, Any] = {
            "overall_score": assessment.overall_score,
            "risk_level": assessment.risk_level.value,
            "urgency_level": assessment.urgency_level.value,
        }

        if crisis_indicators or assessment.urgency_level == UrgencyLevel.IMMEDIATE:
            alerts.append(AlertCreate(
                user_id=user_id,
                alert_type=AlertType.CRISIS,
                severity_level=AlertSeverity.CRITICAL,
                alert_title="Immediate support recommended",
                alert_description="Current check-in indicates acute distress.",
                trigger_data={**snapshot, "crisis_indicators": list(crisis_indicators)},
            ))

        if trend is None:
            return alerts

        trend_data = {
            **snapshot,
            "overall_trend": trend.overall_trend.value,
            "trend_risk_level": trend.risk_level.value,
            "short_term_risk_factors": list(trend.short_term.risk_factors),
        }
        if trend.overall_trend == TrendDirection.CONCERNING:
            alerts.append(AlertCreate(
                user_id=user_id,
                alert_type=AlertType.RISK_PATTERN,
                severity_level=AlertSeverity.HIGH,
                alert_title="Concerning mood pattern",
                alert_description="Recent mood history shows a concerning pattern.",
                trigger_data=trend_data,
            ))
        elif trend.overall_trend == TrendDirection.DECLINING:
            alerts.append(AlertCreate(
                user_id=user_id,
                alert_type=AlertType.DECLINING_TREND,
                severity_level=AlertSeverity.MODERATE,
                alert_title="Mood trending down",
                alert_description="Average mood over the last week is below the monthly average.",
                trigger_data=trend_data,
            ))
        elif trend.overall_trend == TrendDirection.IMPROVING:
            alerts.append(AlertCreate(
                user_id=user_id,
                alert_type=AlertType.IMPROVEMENT,
                severity_level=AlertSeverity.LOW,
                alert_title="Mood improving",
                alert_description="Average mood over the last week is above the longer-term average.",
                trigger_data=trend_data,
            ))
        return alerts
