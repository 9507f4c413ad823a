from __future__ import annotations

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "TalentDesk"
    app_env: str = Field("development", validation_alias=AliasChoices("app_env", "node_env"))
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"
    cors_origin: str = "*"

    api_key: str = ""
    genai_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    genai_model: str = "gemini-2.5-flash"
    genai_match_model: str = "gemini-2.5-pro"
    genai_timeout_sec: int = 60

    search_enabled: bool = True
    search_url: str = "https://html.duckduckgo.com/html/"
    search_max_results: int = 5
    search_timeout_sec: int = 10

    match_debounce_sec: float = 1.5
    max_company_files: int = 5
    max_upload_bytes: int = 4 * 1024 * 1024

    database_url: str = "sqlite://"
    web_ui_enabled: bool = True

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, value: str) -> str:
        allowed = {"development", "staging", "production", "test"}
        if value not in allowed:
            raise ValueError(f"app_env must be one of {sorted(allowed)}")
        return value

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]

    @property
    def ai_configured(self) -> bool:
        return bool(self.api_key.strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
