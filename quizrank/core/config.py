"""
Core configuration for QuizRank
Quiz generation, grading and leaderboard backend
"""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
import secrets


class Settings(BaseSettings):
    """Application settings"""

    # Application Settings
    APP_NAME: str = "QuizRank"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = "Quiz generation, grading and leaderboard backend"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "QuizRank Backend"

    # Security
    SECRET_KEY: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    ALGORITHM: str = "HS256"

    # First admin, created at startup when all three are set
    FIRST_ADMIN_USERNAME: Optional[str] = Field(default=None)
    FIRST_ADMIN_EMAIL: Optional[str] = Field(default=None)
    FIRST_ADMIN_PASSWORD: Optional[str] = Field(default=None)

    # Database
    DATABASE_URL: Optional[str] = Field(default=None)
    POSTGRES_USER: Optional[str] = Field(default=None)
    POSTGRES_PASSWORD: Optional[str] = Field(default=None)
    POSTGRES_SERVER: Optional[str] = Field(default=None)
    POSTGRES_PORT: str = Field(default="5432")
    POSTGRES_DB: Optional[str] = Field(default=None)
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_OVERFLOW: int = Field(default=20)
    DB_POOL_TIMEOUT: int = Field(default=30)
    DB_POOL_RECYCLE: int = Field(default=1800)
    DB_STATEMENT_TIMEOUT_MS: int = Field(default=15000)

    # CORS
    BACKEND_CORS_ORIGINS: str = Field(default="http://localhost:5173,http://localhost:3000")
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True)

    # Sentry
    SENTRY_DSN: Optional[str] = Field(default=None)

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = Field(default=True)
    RATE_LIMIT_REQUESTS: int = Field(default=100)
    RATE_LIMIT_PERIOD: int = Field(default=60)  # seconds

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE: Optional[str] = Field(default="logs/quizrank.log")
    LOG_MAX_BYTES: int = Field(default=10 * 1024 * 1024)
    LOG_BACKUP_COUNT: int = Field(default=5)

    # Quiz engine
    QUIZ_MAX_QUESTIONS: int = Field(default=100)
    QUIZ_DRAW_ATTEMPTS: int = Field(default=10)
    GRADING_MODE: str = Field(default="lenient")
    SCORE_MODE: str = Field(default="practice")

    # Leaderboard
    LEADERBOARD_DEFAULT_LIMIT: int = Field(default=10)
    LEADERBOARD_MAX_LIMIT: int = Field(default=100)
    WEEKLY_WINDOW_DAYS: int = Field(default=7)
    MONTHLY_WINDOW_DAYS: int = Field(default=30)

    class Config:
        env_file = ".env"
        case_sensitive = True

    @field_validator("GRADING_MODE")
    @classmethod
    def validate_grading_mode(cls, value: str) -> str:
        value = value.lower()
        if value not in ("strict", "lenient"):
            raise ValueError("GRADING_MODE must be 'strict' or 'lenient'")
        return value

    def get_database_url(self) -> str:
        """Get database URL with proper formatting"""
        if self.DATABASE_URL:
            # Handle Render's postgres:// URLs
            db_url = self.DATABASE_URL
            if db_url.startswith("postgres://"):
                db_url = db_url.replace("postgres://", "postgresql://", 1)
            return db_url

        # Build URL from components
        if all([self.POSTGRES_USER, self.POSTGRES_PASSWORD,
                self.POSTGRES_SERVER, self.POSTGRES_DB]):
            return (
                f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@"
                f"{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
            )

        # Default for development
        return "sqlite:///./quizrank.db"

    def get_cors_origins(self) -> list[str]:
        """Get CORS origins as list"""
        if self.BACKEND_CORS_ORIGINS:
            return [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]
        return ["http://localhost:5173"]

    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def strict_grading(self) -> bool:
        return self.GRADING_MODE == "strict"


settings = Settings()
