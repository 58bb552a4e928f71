"""
Core settings and environment variables for Civic Pulse Map.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    # Application
    APP_NAME: str = "Civic Pulse Map"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS - Frontend URLs allowed to access this API
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"

    # Firebase/Firestore (comment store)
    # At least one of these must be set; the store refuses to start otherwise.
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None  # Path to service account JSON
    COMMENTS_COLLECTION: str = "comments"

    # Theme classifier
    # - AI_PROVIDER: "anthropic" (default), "openai", or "mock" (offline keyword rules)
    # - AI_MODEL: optional override of the provider's default model
    AI_PROVIDER: str = "anthropic"
    ANTHROPIC_API_KEY: Optional[str] = None
    OPENAI_API_KEY: Optional[str] = None
    AI_MODEL: Optional[str] = None
    AI_MAX_TOKENS: int = 16
    AI_TIMEOUT_SECONDS: float = 10.0

    # Map rendering (Mapbox tiles). Missing token disables the map, nothing else.
    MAPBOX_TOKEN: Optional[str] = None

    # Client-side controllers
    API_BASE_URL: str = "http://127.0.0.1:8000"
    VOTE_FLAGS_PATH: str = "./.civic_map_votes.json"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @property
    def cors_origins_list(self) -> list:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
