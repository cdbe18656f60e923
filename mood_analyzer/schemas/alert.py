from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from mood_analyzer.models.mental_health_alert import AlertSeverity, AlertType


class AlertBase(BaseModel):
    alert_type: AlertType
    severity_level: AlertSeverity
    alert_title: str
    alert_description: Optional[str] = None
    trigger_data: Dict[str, Any] = Field(default_factory=dict)


class AlertCreate(AlertBase):
    user_id: str


class Alert(AlertBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    professional_referral_needed: bool
    crisis_intervention_required: bool
    resolved: bool
    resolved_at: Optional[datetime] = None
    created_at: datetime
