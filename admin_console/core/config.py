# admin_console/core/config.py
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # tell pydantic-settings which .env file to load
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    MONGO_URI: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "ocl"

    # no default: a missing signing secret must stop the app from starting
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    LOG_LEVEL: str = "INFO"

    # seeded as super_admin on first start, only when a password is configured
    DEFAULT_ADMIN_EMAIL: str = "admin@ocl.com"
    DEFAULT_ADMIN_NAME: str = "Default Admin"
    DEFAULT_ADMIN_PASSWORD: Optional[str] = None

    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 10000


settings = Settings()
