"""Application configuration management."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """knowbase engine settings loaded from environment variables."""

    # Ingestion
    knowbase_chunk_size: int = 300
    knowbase_fetch_timeout: float = 20.0
    knowbase_user_agent: str = "knowbase/0.1"
    knowbase_clean_html: bool = True

    # Query
    knowbase_query_limit: int = 5
    knowbase_min_relevance_score: float = 0.3
    knowbase_preview_length: int = 300

    # Listing
    knowbase_list_limit: int = 50
    knowbase_list_preview_length: int = 100

    # Summaries
    knowbase_summary_sentences: int = 3

    # Logging
    knowbase_log_level: str = "INFO"

    @property
    def chunk_size(self) -> int:
        return self.knowbase_chunk_size

    @property
    def fetch_timeout(self) -> float:
        return self.knowbase_fetch_timeout

    @property
    def log_level(self) -> str:
        return self.knowbase_log_level.upper()

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
