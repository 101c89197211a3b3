"""Application configuration via environment variables."""
import pytz
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./habits.db"
    API_KEY: str = ""
    CORS_ORIGINS: str = "*"
    DEFAULT_TIMEZONE: str = "UTC"  # IANA tz, applied to naive timestamps
    SAVE_MAX_ATTEMPTS: int = 5
    LOG_LEVEL: str = "INFO"

    @field_validator("DEFAULT_TIMEZONE")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        """Fail at startup on an unknown zone rather than on the first registration."""
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone '{v}'")
        return v

    class Config:
        env_file = ".env"


settings = Settings()
