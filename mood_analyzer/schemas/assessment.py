from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from mood_analyzer.models.mood_entry import PeriodType


class AssessmentPreviewRequest(BaseModel):
    """Stateless engine input; period labels are free-form."""
    moods: Dict[str, str]
    feedback: Dict[str, str] = Field(default_factory=dict)


class AssessmentCreate(BaseModel):
    moods: Dict[PeriodType, str]
    feedback: Dict[PeriodType, str] = Field(default_factory=dict)
    session_id: Optional[str] = None


class SupportResourceOut(BaseModel):
    type: str
    name: str
    description: str
    contact: str
    url: Optional[str] = None


class AssessmentResult(BaseModel):
    overall_score: float
    risk_level: str
    urgency_level: str
    primary_concerns: List[str]
    strengths: List[str]
    recommendations: List[str]
    requires_professional_help: bool
    support_resources: List[SupportResourceOut]


class TrendWindowOut(BaseModel):
    period: str
    average_score: float
    dominant_emotion: str
    emotion_count: Dict[str, int]
    risk_factors: List[str]


class TrendAnalysisOut(BaseModel):
    short_term: TrendWindowOut
    medium_term: TrendWindowOut
    long_term: TrendWindowOut
    overall_trend: str
    risk_level: str
    recommendations: List[str]


class AssessmentSession(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    session_id: str
    session_type: str
    status: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    overall_score: float
    risk_assessment: str
    recommendations: List[str]
    follow_up_required: bool
    session_metadata: Dict[str, Any] = Field(default_factory=dict)
