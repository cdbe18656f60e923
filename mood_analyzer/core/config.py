import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    APP_NAME: str = "Mood Analyzer Backend"
    ENV: str = os.getenv("ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./mood_analyzer.db")

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    # CORS
    CORS_ORIGINS: List[str] = []

    # History windows
    HISTORY_DAYS: int = int(os.getenv("HISTORY_DAYS", "30"))
    TREND_LOOKBACK_DAYS: int = int(os.getenv("TREND_LOOKBACK_DAYS", "90"))
    ASSESSMENT_HISTORY_LIMIT: int = int(os.getenv("ASSESSMENT_HISTORY_LIMIT", "10"))

    # Internal features / flags
    ALERTS_ENABLED: bool = os.getenv("ALERTS_ENABLED", "1") in ("1", "true", "True")

    # Pydantic v2 settings config
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

def _load_settings() -> "Settings":
    s = Settings()
    origins = os.getenv("FRONTEND_ORIGINS") or os.getenv("FRONTEND_ORIGIN")
    dev_defaults = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    if origins:
        provided = [o.strip() for o in origins.split(",") if o.strip()]
        # Dev defaults stay so local frontends keep working against shared envs
        s.CORS_ORIGINS = sorted(set(provided + dev_defaults))
    else:
        s.CORS_ORIGINS = dev_defaults
    return s

settings = _load_settings()
