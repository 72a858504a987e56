from typing import Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Music Store API"
    DATABASE_URL: str = "sqlite:///./musicstore.db"

    # Cart identity cookie
    CART_COOKIE_NAME: str = "Session"
    CART_COOKIE_MAX_AGE: Optional[int] = None  # None = browser-session cookie

    # development, staging, production
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
