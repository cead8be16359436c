"""
Docstring for blog_platform.config

Конфигурация приложения.
Всё берется из .env файла или переменных окружения.
"""
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Pydantic Settings конфиг
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = "postgresql://blog_user:blog_password@db:5432/blog_db"
    CREATE_TABLES: bool = True

    # JWT
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_DAYS: int = 30

    # Cookie с сессионным токеном
    TOKEN_COOKIE_NAME: str = "token"
    COOKIE_SECURE: bool = False

    # Стоимость bcrypt (в тестах ставим минимальную)
    BCRYPT_ROUNDS: int = 12

    # Server
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]
    LOG_LEVEL: str = "INFO"

    # RATE-LIMITS
    RATE_LIMIT_ENABLED: bool = True
    REGISTER_RATE_LIMIT: str = "5/minute" # Значения по-умолчанию, на случай
    LOGIN_RATE_LIMIT: str = "10/minute"   # если в .env не указаны иные значения

    # Значения по умолчанию для картинок
    DEFAULT_COVER_IMAGE: str = "https://images.pexels.com/photos/3184291/pexels-photo-3184291.jpeg"
    DEFAULT_PROFILE_PICTURE: str = "https://images.pexels.com/photos/771742/pexels-photo-771742.jpeg"

# Создаем глобальный объект settings
settings = Settings()
