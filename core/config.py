from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Shipyard Operations API"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # -------------------------------------------------
    # CORS (dashboard origins)
    # -------------------------------------------------
    DASHBOARD_DOMAIN: Optional[str] = None
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
    ]

    # -------------------------------------------------
    # Supabase (Primary DB & Auth)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None
    SUPABASE_SCHEMA: str = "daily_report_shipyard"

    # -------------------------------------------------
    # Identity resolution
    # -------------------------------------------------
    PROFILES_TABLE: str = "profiles"
    PROFILE_FETCH_RETRIES: int = 3
    PROFILE_FETCH_BACKOFF_SECONDS: float = 0.5

    # -------------------------------------------------
    # Login throttling
    # -------------------------------------------------
    LOGIN_RATE_LIMIT: int = 10
    LOGIN_RATE_WINDOW_SECONDS: int = 60

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Add the dashboard's own domain to CORS
# -------------------------------------------------
if settings.DASHBOARD_DOMAIN:
    domain = settings.DASHBOARD_DOMAIN
    if not domain.startswith("http"):
        domain = f"https://{domain}"
    settings.BACKEND_CORS_ORIGINS = sorted(
        set([o.rstrip("/") for o in settings.BACKEND_CORS_ORIGINS] + [domain.rstrip("/")])
    )
