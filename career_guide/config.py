from pydantic_settings import BaseSettings
from typing import Optional, Union
from functools import lru_cache
from pathlib import Path
from pydantic import field_validator

# Get the project root directory (one level up from career_guide/)
PROJECT_ROOT = Path(__file__).parent.parent

# Export these for app-wide use
__all__ = ["Settings", "settings", "get_settings"]

class Settings(BaseSettings):
    # App Settings
    app_name: str = "Career Guide API"
    debug: Union[bool, str] = True

    @field_validator('debug', mode='before')
    @classmethod
    def parse_debug(cls, v):
        """Parse debug from various formats"""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            v_lower = v.lower().strip()
            if v_lower in ('true', '1', 'yes', 'on'):
                return True
            if v_lower in ('false', '0', 'no', 'off'):
                return False
            # Anything else (like 'WARN') counts as development
            return True
        return bool(v)

    # Server Settings
    host: str = "127.0.0.1"
    port: int = 8080

    # CORS Settings - Allowed frontend URLs
    cors_origins: Union[str, list[str]] = ["*"]

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string or list"""
        if isinstance(v, str):
            if v.strip() == "*":
                return ["*"]
            return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v

    # Environment (development or production)
    environment: str = "development"

    # Document store - Supabase
    supabase_url: Optional[str] = None
    supabase_service_key: Optional[str] = None

    # Gemini (generation provider)
    gemini_api_key: Optional[str] = None  # Maps to GEMINI_API_KEY
    gemini_model: str = "gemini-2.0-flash"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta/models"
    gemini_temperature: float = 0.7

    # Generation resilience
    ai_request_timeout: float = 20.0  # Seconds before an attempt is abandoned
    ai_max_attempts: int = 3
    ai_backoff_base: float = 2.0  # 2s, then 4s

    # Daily plans always add up to this many minutes
    daily_plan_minutes: int = 60

    # Authentication
    clerk_secret_key: Optional[str] = None

    # Logging
    log_level: str = "INFO"

    class Config:
        # Look for .env in project root
        env_file = str(PROJECT_ROOT / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields in .env that aren't defined

@lru_cache()
def get_settings() -> Settings:
    """
    Create and cache a single Settings instance.
    Returns the same instance on subsequent calls.
    """
    return Settings()

# Create a global settings instance for convenience
settings = get_settings()
