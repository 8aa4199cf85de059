"""Application settings from environment variables (and a local .env file).

Required values have no default, so a missing one fails at startup with
``pydantic.ValidationError``. Empty variables count as unset.
"""
from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    api_base_url: str
    web_base_url: str
    database_url: str
    port: int = 3333

    # Mail
    smtp_host: str
    smtp_port: int = 587
    smtp_user: str
    smtp_password: str
    smtp_use_tls: bool = True
    mail_from_name: str = "Plann.er Team"
    mail_from_address: Optional[str] = None

    # comma separated in the environment
    cors_origins: Annotated[List[str], NoDecode] = ["http://localhost:3000"]
    log_path: Optional[str] = None

    @field_validator("api_base_url", "web_base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("must be an absolute http(s) URL")
        return value.rstrip("/")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @property
    def sender_address(self) -> str:
        return self.mail_from_address or self.smtp_user


@lru_cache
def get_settings() -> Settings:
    return Settings()
