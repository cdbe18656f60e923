from __future__ import annotations

from datetime import datetime
from enum import Enum as PyEnum
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Boolean, DateTime, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from mood_analyzer.db.session import Base


class AlertType(str, PyEnum):
    CRISIS = "crisis"
    DECLINING_TREND = "declining_trend"
    RISK_PATTERN = "risk_pattern"
    IMPROVEMENT = "improvement"
    MILESTONE = "milestone"


class AlertSeverity(str, PyEnum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class MentalHealthAlert(Base):
    __tablename__ = "mental_health_alerts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    alert_type: Mapped[AlertType] = mapped_column(
        Enum(
            AlertType,
            name="alert_type",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
            validate_strings=True,
        ),
        nullable=False,
    )
    severity_level: Mapped[AlertSeverity] = mapped_column(
        Enum(
            AlertSeverity,
            name="alert_severity",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
            validate_strings=True,
        ),
        nullable=False,
    )
    alert_title: Mapped[str] = mapped_column(String(150), nullable=False)
    alert_description: Mapped[Optional[str]] = mapped_column(Text)
    trigger_data: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    professional_referral_needed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    crisis_intervention_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    resolved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    resolved_at: Mapped[Optional[datetime]] = mapped_column(DateTime)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
