from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Database
    # For SQLite (default, no extra driver needed)
    DATABASE_URL: str = "sqlite:///./money.db"

    # For PostgreSQL (requires psycopg2-binary)
    # DATABASE_URL: str = "postgresql://postgres:postgres@db:5432/money_tracker"

    SQL_ECHO: bool = False

    # CORS
    FRONTEND_ORIGIN: str = "http://localhost:3000"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Server / client
    HOST: str = "127.0.0.1"
    PORT: int = 5015
    API_BASE_URL: str = "http://localhost:5015"

    class Config:
        env_file = ".env"

    @property
    def allowed_origins(self) -> List[str]:
        origins = ["http://localhost:3000"]
        if self.FRONTEND_ORIGIN and self.FRONTEND_ORIGIN not in origins:
            origins.append(self.FRONTEND_ORIGIN)
        return origins


settings = Settings()
