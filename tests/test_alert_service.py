"""
Test suite for mental health alerts.

Run with: python -m pytest tests/test_alert_service.py -v
"""

import pytest

from conftest import NOW, make_history
from mood_analyzer.models.mental_health_alert import AlertSeverity, AlertType
from mood_analyzer.schemas.alert import AlertCreate
from mood_analyzer.services.alert_service import AlertNotFound, AlertService
from mood_analyzer.services.assessment_engine import AssessmentEngine
from mood_analyzer.services.trend_analysis import TrendAnalyzer

USER = "user-1"


def _alert(alert_type=AlertType.DECLINING_TREND, severity=AlertSeverity.MODERATE, user_id=USER):
    return AlertCreate(
        user_id=user_id,
        alert_type=alert_type,
        severity_level=severity,
        alert_title="Test alert",
    )


# =============================================================================
# ALERT RULES
# =============================================================================

class TestAlertRules:
    """alerts_for_assessment is pure; nothing touches the database."""

    def test_calm_checkin_without_history_raises_nothing(self):
        assessment = AssessmentEngine.assess({"today": "calm"})
        assert AlertService.alerts_for_assessment(USER, assessment, None, []) == []

    def test_immediate_urgency_raises_crisis_alert(self):
        assessment = AssessmentEngine.assess({"today": "devastated"})

        alerts = AlertService.alerts_for_assessment(USER, assessment, None, [])

        assert len(alerts) == 1
        assert alerts[0].alert_type == AlertType.CRISIS
        assert alerts[0].severity_level == AlertSeverity.CRITICAL
        assert alerts[0].trigger_data["urgency_level"] == "immediate"

    def test_crisis_indicators_alone_raise_crisis_alert(self):
        assessment = AssessmentEngine.assess({"today": "neutral"})

        alerts = AlertService.alerts_for_assessment(USER, assessment, None, ["hurt myself"])

        assert [a.alert_type for a in alerts] == [AlertType.CRISIS]
        assert alerts[0].trigger_data["crisis_indicators"] == ["hurt myself"]

    def test_declining_trend(self):
        trend = TrendAnalyzer.analyze(
            make_history(
                ("neutral", 1), ("neutral", 2),
                ("content", 10), ("content", 20),
                ("joyful", 40), ("joyful", 50),
            ),
            now=NOW,
        )
        assessment = AssessmentEngine.assess({"today": "neutral"}, {}, trend)

        alerts = AlertService.alerts_for_assessment(USER, assessment, trend, [])

        assert [(a.alert_type, a.severity_level) for a in alerts] == [
            (AlertType.DECLINING_TREND, AlertSeverity.MODERATE)
        ]
        assert alerts[0].trigger_data["overall_trend"] == "declining"

    def test_improving_trend(self):
        trend = TrendAnalyzer.analyze(
            make_history(
                ("joyful", 1), ("joyful", 2),
                ("content", 10), ("content", 15),
                ("neutral", 40), ("neutral", 60),
            ),
            now=NOW,
        )
        assessment = AssessmentEngine.assess({"today": "joyful"}, {}, trend)

        alerts = AlertService.alerts_for_assessment(USER, assessment, trend, [])

        assert [a.alert_type for a in alerts] == [AlertType.IMPROVEMENT]
        assert alerts[0].severity_level == AlertSeverity.LOW

    def test_stable_trend_raises_nothing(self):
        trend = TrendAnalyzer.analyze(make_history(("neutral", 1), ("neutral", 10)), now=NOW)
        assessment = AssessmentEngine.assess({"today": "neutral"}, {}, trend)
        assert AlertService.alerts_for_assessment(USER, assessment, trend, []) == []


# =============================================================================
# PERSISTENCE
# =============================================================================

class TestAlertPersistence:

    @pytest.mark.parametrize(
        "alert_type, severity, referral, intervention",
        [
            (AlertType.CRISIS, AlertSeverity.CRITICAL, True, True),
            (AlertType.RISK_PATTERN, AlertSeverity.HIGH, True, False),
            (AlertType.DECLINING_TREND, AlertSeverity.MODERATE, False, False),
            (AlertType.IMPROVEMENT, AlertSeverity.LOW, False, False),
        ],
    )
    def test_create_sets_flags(self, db, alert_type, severity, referral, intervention):
        alert = AlertService.create_alert(db, _alert(alert_type, severity))

        assert alert.id
        assert alert.resolved is False
        assert alert.professional_referral_needed is referral
        assert alert.crisis_intervention_required is intervention

    def test_list_active_excludes_resolved_and_other_users(self, db):
        keep = AlertService.create_alert(db, _alert())
        done = AlertService.create_alert(db, _alert())
        AlertService.create_alert(db, _alert(user_id="someone-else"))
        AlertService.resolve_alert(db, done.id)

        active = AlertService.list_active_alerts(db, USER)

        assert [a.id for a in active] == [keep.id]

    def test_resolve_sets_timestamp(self, db):
        alert = AlertService.create_alert(db, _alert())

        resolved = AlertService.resolve_alert(db, alert.id)

        assert resolved.resolved is True
        assert resolved.resolved_at is not None

    def test_resolve_unknown_alert(self, db):
        with pytest.raises(AlertNotFound):
            AlertService.resolve_alert(db, "does-not-exist")
