"""
HTTP API tests using FastAPI's TestClient against in-memory SQLite.

Run with: python -m pytest tests/test_api.py -v
"""

from mood_analyzer.services.trend_analysis import RECOMMENDATION_START_TRACKING

USER = "api-user"


class TestReferenceEndpoints:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_emotions_catalog(self, client):
        response = client.get("/api/emotions")

        assert response.status_code == 200
        emotions = response.json()
        assert len(emotions) == 12
        assert emotions[0]["id"] == "ecstatic"
        assert emotions[-1]["id"] == "devastated"
        assert all(e["emoji"] for e in emotions)


class TestPreview:

    def test_positive_checkin(self, client):
        response = client.post(
            "/api/assessments/preview",
            json={"moods": {"today": "joyful", "week": "content", "month": "calm"}},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["overall_score"] == 4.33
        assert body["risk_level"] == "low"
        assert body["urgency_level"] == "none"
        assert body["requires_professional_help"] is False

    def test_empty_moods_is_unprocessable(self, client):
        response = client.post("/api/assessments/preview", json={"moods": {}})

        assert response.status_code == 422
        assert "no mood observations" in response.json()["detail"]


class TestAssessmentFlow:

    def test_unknown_period_is_rejected(self, client):
        response = client.post(
            f"/api/users/{USER}/assessments", json={"moods": {"yesterday": "sad"}}
        )
        assert response.status_code == 422

    def test_crisis_checkin_end_to_end(self, client):
        response = client.post(
            f"/api/users/{USER}/assessments",
            json={
                "moods": {"today": "devastated"},
                "feedback": {"today": "I feel hopeless"},
                "session_id": "api-session",
            },
        )
        assert response.status_code == 201
        body = response.json()
        assert body["risk_level"] == "high"
        assert body["urgency_level"] == "immediate"
        assert body["support_resources"][0]["type"] == "crisis"

        moods = client.get(f"/api/users/{USER}/moods").json()
        assert [m["mood_id"] for m in moods] == ["devastated"]
        assert moods[0]["mood_category"] == "concerning"

        trends = client.get(f"/api/users/{USER}/trends").json()
        assert trends["overall_trend"] == "concerning"
        assert trends["short_term"]["dominant_emotion"] == "Devastated"

        sessions = client.get(f"/api/users/{USER}/assessments").json()
        assert [s["session_id"] for s in sessions] == ["api-session"]
        assert sessions[0]["risk_assessment"] == "high"

        alerts = client.get(f"/api/users/{USER}/alerts").json()
        assert {a["alert_type"] for a in alerts} == {"crisis", "risk_pattern"}

        resolved = client.post(f"/api/alerts/{alerts[0]['id']}/resolve")
        assert resolved.status_code == 200
        assert resolved.json()["resolved"] is True
        assert len(client.get(f"/api/users/{USER}/alerts").json()) == 1

    def test_trends_without_history(self, client):
        trends = client.get(f"/api/users/{USER}/trends").json()
        assert trends["overall_trend"] == "stable"
        assert trends["recommendations"] == [RECOMMENDATION_START_TRACKING]

    def test_resolve_unknown_alert(self, client):
        response = client.post("/api/alerts/missing/resolve")
        assert response.status_code == 404
