from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Float, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from mood_analyzer.db.session import Base


class AssessmentSession(Base):
    """One completed comprehensive assessment, with the trend it was based on."""
    __tablename__ = "assessment_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    # check-in session the moods were stored under; clients may reuse it
    session_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    session_type: Mapped[str] = mapped_column(String(30), nullable=False, default="comprehensive")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="completed")
    started_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime)
    overall_score: Mapped[float] = mapped_column(Float, nullable=False)
    risk_assessment: Mapped[str] = mapped_column(String(20), nullable=False)
    recommendations: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    follow_up_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # "metadata" is reserved on declarative classes
    session_metadata: Mapped[Dict[str, Any]] = mapped_column("metadata", JSON, nullable=False, default=dict)
