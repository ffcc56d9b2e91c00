from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./tournament.db"
    SECRET_KEY: str = "YOUR_SECRET_KEY_HERE"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    CORS_ORIGINS: str = "" # Comma-separated, empty allows any origin
    LOG_LEVEL: str = "INFO"

    DEFAULT_MAX_TEAMS: int = 4
    DEFAULT_PLAYERS_PER_TEAM: int = 5

    # Only read by app.seed
    ADMIN_EMAIL: str = "admin@example.com"
    ADMIN_PASSWORD: str = "change-me-please"
    ADMIN_FULL_NAME: str = "Tournament Admin"

    class Config:
        env_file = ".env"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

settings = Settings()
