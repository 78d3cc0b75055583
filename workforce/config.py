from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional


class Settings(BaseSettings):
    # Core
    environment: str = Field(default="dev")
    app_name: str = Field(default="Workforce Dispatch API")
    tz_default: str = Field(default="America/Vancouver", alias="TZ_DEFAULT")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Session
    session_secret: str = Field(default="workforce-management-secret", alias="SESSION_SECRET")
    session_algorithm: str = Field(default="HS256")
    session_ttl_seconds: int = Field(default=60 * 60 * 24, alias="SESSION_TTL")  # 24 hours
    session_cookie_name: str = Field(default="session", alias="SESSION_COOKIE_NAME")
    session_cookie_secure: bool = Field(default=False, alias="SESSION_COOKIE_SECURE")

    # Store
    seed_demo_data: bool = Field(default=True, alias="SEED_DEMO_DATA")

    # Activity feed
    activity_feed_limit: Optional[int] = Field(default=None, alias="ACTIVITY_FEED_LIMIT")

    # Dashboard
    chart_months_default: int = Field(default=6, alias="CHART_MONTHS_DEFAULT")

    # Rate limit
    rate_limit: str = Field(default="100/minute", alias="RATE_LIMIT")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        populate_by_name = True


settings = Settings()
