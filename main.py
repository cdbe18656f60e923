# Load .env file FIRST before any other imports that use os.getenv
from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from mood_analyzer.core.config import settings
from mood_analyzer.db.database import initialize_database
from mood_analyzer.db.session import get_db
from mood_analyzer.schemas.alert import Alert as AlertSchema
from mood_analyzer.schemas.assessment import (
    AssessmentCreate,
    AssessmentPreviewRequest,
    AssessmentResult,
    AssessmentSession as AssessmentSessionSchema,
    TrendAnalysisOut,
)
from mood_analyzer.schemas.mood import EmotionOut, MoodEntry as MoodEntrySchema
from mood_analyzer.services.alert_service import AlertNotFound, AlertService
from mood_analyzer.services.assessment_engine import AssessmentEngine, InvalidAssessmentInput
from mood_analyzer.services.mood_service import MoodService
from mood_analyzer.utils.emotion_mapping import EMOTION_MAPPINGS, emoji_for

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))


@asynccontextmanager
async def lifespan(_app: FastAPI):
    initialize_database()
    logging.info("[startup] %s ready (env=%s)", settings.APP_NAME, settings.ENV)
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _invalid_input(exc: InvalidAssessmentInput) -> HTTPException:
    return HTTPException(status_code=422, detail=str(exc))


@app.get("/api/health")
def health():
    return {"status": "ok", "app": settings.APP_NAME}


@app.get("/api/emotions", response_model=List[EmotionOut])
def list_emotions():
    return [
        EmotionOut(**emotion.to_dict(), emoji=emoji_for(emotion.id))
        for emotion in EMOTION_MAPPINGS
    ]


# --- Assessments ---


@app.post("/api/assessments/preview", response_model=AssessmentResult)
def preview_assessment(payload: AssessmentPreviewRequest):
    """Run the engine on the submitted check-in only; nothing is stored."""
    try:
        assessment = AssessmentEngine.assess(payload.moods, payload.feedback)
    except InvalidAssessmentInput as exc:
        raise _invalid_input(exc) from exc
    return assessment.to_dict()


@app.post(
    "/api/users/{user_id}/assessments",
    response_model=AssessmentResult,
    status_code=status.HTTP_201_CREATED,
)
def create_assessment(
    user_id: str,
    payload: AssessmentCreate,
    db: Session = Depends(get_db),
):
    try:
        assessment = MoodService.perform_comprehensive_assessment(
            db,
            user_id=user_id,
            current_moods=payload.moods,
            text_feedback=payload.feedback,
            session_id=payload.session_id,
        )
    except InvalidAssessmentInput as exc:
        raise _invalid_input(exc) from exc
    return assessment.to_dict()


@app.get("/api/users/{user_id}/assessments", response_model=List[AssessmentSessionSchema])
def list_assessments(
    user_id: str,
    limit: int = Query(settings.ASSESSMENT_HISTORY_LIMIT, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return MoodService.get_assessment_history(db, user_id, limit=limit)


# --- History ---


@app.get("/api/users/{user_id}/moods", response_model=List[MoodEntrySchema])
def list_moods(
    user_id: str,
    days: int = Query(settings.HISTORY_DAYS, ge=1, le=365),
    db: Session = Depends(get_db),
):
    return MoodService.get_mood_history(db, user_id, days=days)


@app.get("/api/users/{user_id}/trends", response_model=TrendAnalysisOut)
def get_trends(user_id: str, db: Session = Depends(get_db)):
    return MoodService.analyze_trends(db, user_id).to_dict()


# --- Alerts ---


@app.get("/api/users/{user_id}/alerts", response_model=List[AlertSchema])
def list_alerts(user_id: str, db: Session = Depends(get_db)):
    return AlertService.list_active_alerts(db, user_id)


@app.post("/api/alerts/{alert_id}/resolve", response_model=AlertSchema)
def resolve_alert(alert_id: str, db: Session = Depends(get_db)):
    try:
        return AlertService.resolve_alert(db, alert_id)
    except AlertNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
