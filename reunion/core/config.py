from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
import secrets
import os

class Settings(BaseSettings):
    # Project Info
    PROJECT_NAME: str = "Alumni Reunion API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"

    # Server settings
    PORT: int = int(os.environ.get("PORT", 8000))

    # Sessions
    SECRET_KEY: str = os.environ.get("SECRET_KEY", secrets.token_urlsafe(32))
    JWT_ALGORITHM: str = "HS256"
    SESSION_EXPIRE_MINUTES: int = 60 * 24 * 7
    SESSION_COOKIE_NAME: str = "reunion_session"

    # Testing
    TESTING: bool = False

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str] | str:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Security Headers
    SECURITY_HEADERS: bool = True
    HSTS_MAX_AGE: int = 31536000  # 1 year

    # Request Validation
    MAX_CONTENT_LENGTH: int = 20 * 1024 * 1024  # 20MB

    # Database
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "sqlite+aiosqlite:///./sqlite_db/reunion.db")
    SQL_ECHO: bool = False

    # Documentation
    SHOW_DOCS: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE_PATH: str = ""  # empty: console only

    # Page cache
    CACHE_TTL_MINUTES: int = 5

    # Uploads
    UPLOAD_DIR: str = "./uploads"
    UPLOAD_URL_PATH: str = "/files"
    PUBLIC_BASE_URL: str = "http://localhost:8000"
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024  # 5MB

    # Reference data; a JSON file here replaces the built-in country/state/city data
    GEO_DATASET_PATH: str = ""
    GEO_MIN_CITY_POPULATION: int = 15000

    # Registration
    ALLOWED_EMAIL_DOMAINS: List[str] = [
        "gmail.com",
        "yahoo.com",
        "yahoo.co.in",
        "yahoo.co.uk",
        "outlook.com",
        "hotmail.com",
        "live.com",
        "icloud.com",
        "apple.com",
        "aol.com",
        "protonmail.com",
        "proton.me",
        "zoho.com",
    ]

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", env_file_encoding="utf-8")

# Global instance
settings = Settings()
