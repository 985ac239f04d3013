"""Application configuration from environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment."""
    
    # Database
    database_url: str = "sqlite:///./plan_tracker.db"
    
    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    
    # App settings
    app_name: str = "Plan Tracker"
    debug: bool = False
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "PLAN_TRACKER_"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
