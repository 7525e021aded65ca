from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings

# languages.json shipped next to the package
DEFAULT_LANGUAGES_SOURCE = str(Path(__file__).parent / "static" / "languages.json")


class Settings(BaseSettings):
    github_token: Optional[str] = Field(default=None, alias="GITHUB_TOKEN")
    github_base_url: HttpUrl = Field(
        default="https://api.github.com", alias="GITHUB_BASE_URL"
    )
    github_proxy: Optional[str] = Field(default=None, alias="GITHUB_PROXY")
    http_timeout_seconds: float = Field(default=20.0, alias="HTTP_TIMEOUT_SECONDS")
    languages_source: str = Field(
        default=DEFAULT_LANGUAGES_SOURCE, alias="LANGUAGES_SOURCE"
    )  # file path or http(s) URL
    default_language: str = Field(default="javascript", alias="DEFAULT_LANGUAGE")
    default_per_page: int = Field(default=10, alias="DEFAULT_PER_PAGE")
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # ignore unrelated env vars to avoid validation errors


@lru_cache
def get_settings() -> Settings:
    return Settings()
