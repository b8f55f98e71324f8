"""Application settings loaded from environment variables."""
from typing import List
from pathlib import Path
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Caminho absoluto para o ficheiro .env
ENV_FILE = Path(__file__).parent.parent / ".env"

_DEFAULT_JWT_SECRET = "change-me-in-production-please-0123456789"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Real-State-AI-Backend"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:4200", "http://localhost:8000"]
    # Database
    database_url: str

    # Security
    jwt_secret: str = _DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expiration_minutes: int = 60
    bcrypt_rounds: int = 12

    # Pagination
    default_page_size: int = 15
    max_page_size: int = 100

    # AI / GenAI
    google_genai_api_key: str = ""
    google_genai_model: str = "gemini-2.5-flash"
    google_genai_temperature: float = 0.0
    ai_request_timeout: float = 30.0  # segundos

    @field_validator('database_url')
    @classmethod
    def validate_database_url(cls, v):
        if not v.startswith(('postgresql+asyncpg://', 'sqlite+aiosqlite://')):
            raise ValueError('database_url must use async driver')
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            import json
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("jwt_secret")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if not v or v == _DEFAULT_JWT_SECRET:
            import warnings
            warnings.warn(
                "JWT_SECRET not configured, tokens are signed with the development key.",
                stacklevel=2,
            )
        return v

    @field_validator("max_page_size")
    @classmethod
    def validate_max_page_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_page_size must be at least 1")
        return v


settings = Settings()
