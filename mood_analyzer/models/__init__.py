from mood_analyzer.models.assessment_session import AssessmentSession
from mood_analyzer.models.feedback_entry import FeedbackEntry
from mood_analyzer.models.mental_health_alert import AlertSeverity, AlertType, MentalHealthAlert
from mood_analyzer.models.mood_entry import MoodEntry, PeriodType

__all__ = [
    "AlertSeverity",
    "AlertType",
    "AssessmentSession",
    "FeedbackEntry",
    "MentalHealthAlert",
    "MoodEntry",
    "PeriodType",
]
