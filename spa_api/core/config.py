from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # API Settings
    PROJECT_NAME: str = "Spa Settlement API"
    API_V1_STR: str = "/api/v1"
    PROJECT_VERSION: str = "0.1.0"
    DESCRIPTION: str = "Appointment earnings and worker settlement API"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # MongoDB
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB: str = "spa"

    # Business rules
    BUSINESS_TIMEZONE: str = "America/Bogota"
    REVENUE_SPLIT: float = 0.5  # worker's fraction of gross revenue

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # JWT (verification only)
    SECRET_KEY: str = "change-this-in-production"
    ALGORITHM: str = "HS256"

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env"
    )

    @field_validator("REVENUE_SPLIT")
    @classmethod
    def _split_is_fraction(cls, value: float) -> float:
        if not 0 <= value <= 1:
            raise ValueError("REVENUE_SPLIT must be between 0 and 1")
        return value

settings = Settings()
