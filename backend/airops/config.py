"""
AirOps settings, read from the environment and an optional .env file.
"""
from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache
from pathlib import Path

# backend/airops.db regardless of the working directory
_BASE_DIR = Path(__file__).resolve().parents[1]  # backend/
_DEFAULT_DB_PATH = _BASE_DIR / "airops.db"
_DEFAULT_DB_URI = f"sqlite+aiosqlite:///{_DEFAULT_DB_PATH.as_posix()}"


class Settings(BaseSettings):
    """Every tunable of the service; env names are the upper-cased field names."""
    
    # Application
    app_env: str = Field(default="development", alias="APP_ENV")
    app_name: str = Field(default="AirOps", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    
    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    frontend_url: str = Field(default="http://localhost:3000", alias="FRONTEND_URL")
    
    # Storage
    database_url: str = Field(default=_DEFAULT_DB_URI, alias="DATABASE_URL")
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")
    
    # Empty secret: all mutations are rejected
    edit_secret: str = Field(default="", alias="EDIT_SECRET")
    
    # Accepted flight duration window (inclusive)
    min_flight_duration_minutes: int = Field(default=30, alias="MIN_FLIGHT_DURATION_MINUTES")
    max_flight_duration_hours: int = Field(default=24, alias="MAX_FLIGHT_DURATION_HOURS")
    
    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
    
    @property
    def is_development(self) -> bool:
        return self.app_env == "development"
    
    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
