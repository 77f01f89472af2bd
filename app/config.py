"""
Application Configuration
Loads settings from environment variables
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from .env file"""

    # Application
    APP_ENV: str = "development"
    APP_NAME: str = "EventPass"
    APP_URL: str = "http://localhost:8000"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    # Database
    DATABASE_URL: str = "sqlite:///./eventpass.db"

    # JWT
    JWT_SECRET_KEY: str = "temp-jwt-secret-change-later"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_HOURS: int = 1

    # Accounts
    ADMIN_KEY: Optional[str] = None
    QR_CODE_PREFIX: str = "PSM_"
    RESET_TOKEN_TTL_MINUTES: int = 60

    # Email
    MAIL_PROVIDER: str = "console"  # 'smtp' or 'console'
    EMAIL_FROM: str = "noreply@eventpass.local"
    MAIL_CREDENTIALS_SOURCE: str = "env"  # 'env' or 'file:/path/to/credentials.json'
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origins(self) -> list:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Create global settings instance
settings = Settings()
