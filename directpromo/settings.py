from __future__ import annotations
from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASS: Optional[str] = None
    SMTP_STARTTLS: bool = True
    SMTP_TIMEOUT: float = 30.0

    # Sender and owner mailbox for order/contact notifications
    EMAIL_FROM: str = "orders@directpromo.com"
    EMAIL_TO: str = "directpromo@rogers.com"

    MAX_LOGO_BYTES: int = 10 * 1024 * 1024
    CART_IDLE_SECONDS: float = 24 * 60 * 60
    MAX_CARTS: int = 10000
    LOG_LEVEL: str = "INFO"
    PORT: int = 8000


@lru_cache
def get_settings() -> Settings:
    return Settings()
