# app/config/settings.py
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # App Info
    app_name: str = "Inventario Lotes API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./inventario.db"
    auto_create_tables: bool = True

    # Security
    secret_key: str = "change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # CORS - uno o varios orígenes separados por coma
    cors_origin: str = "http://localhost:5173"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000

    # Dashboard
    expiry_horizon_days: int = 30

    @property
    def sqlalchemy_database_url(self) -> str:
        """Normalizar URL de Postgres para SQLAlchemy"""
        if self.database_url.startswith("postgres://"):
            return self.database_url.replace("postgres://", "postgresql://", 1)
        return self.database_url

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = 'ignore'


settings = Settings()
