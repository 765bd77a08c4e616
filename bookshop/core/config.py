# bookshop/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal

class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False

    # Security
    SECRET_KEY: str
    ALGORITHM: Literal["HS256"] = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Database
    DATABASE_URL: str

    # Reporting
    REPORT_TIMEZONE: str = "UTC"
    RECENT_SALES_LIMIT: int = 5

    # Store defaults (used until a store_settings row exists)
    DEFAULT_STORE_NAME: str = "Faith Community Baptist School Bookshop"
    DEFAULT_CURRENCY: Literal["GHS", "USD", "EUR"] = "GHS"
    DEFAULT_LOW_STOCK_THRESHOLD: int = 10

    # Sales
    DEDUPLICATE_STUDENTS: bool = False

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True

    # Frontend
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]


    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",  
    )


settings = Settings()
