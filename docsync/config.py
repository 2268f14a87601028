"""Application configuration via environment variables."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for a documentation sync run, loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DOCSYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Documentation source
    sitemap_url: str = "https://encore.dev/sitemap.xml"
    user_agent: str = "encore-docsync/1.0"
    request_timeout_seconds: float = 30.0

    # Bucket name -> URL substring; a URL may match several buckets
    buckets: dict[str, str] = {
        "ts": "/ts",
        "go": "/go",
        "platform": "/platform",
    }

    # Files
    docs_dir: Path = Path("docs-summaries")
    skills_dir: Path = Path("skills")
    report_path: Path = Path("update-skills.md")

    # Max chars of page text sent to the LLM per page
    page_text_limit: int = 12000

    # LLM API Keys
    openai_api_key: str | None = None
    anthropic_api_key: str | None = None
    llm_provider: Literal["openai", "anthropic"] = "openai"
    llm_model: str = "gpt-4o-mini"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
