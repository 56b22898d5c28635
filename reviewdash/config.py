"""Application configuration loaded from environment variables."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Centralised settings, no hardcoded values anywhere else."""

    # Database
    database_url: str = Field(..., description="SQLAlchemy async URL")

    # CORS
    allowed_origins: str = Field("http://localhost:3000")

    # App
    app_env: str = Field("development")
    log_level: str = Field("INFO")

    # Dashboard shape
    trend_months: int = Field(6, ge=1, description="Months in the review trend chart")
    top_categories: int = Field(5, ge=0, description="Categories in the category breakdown")
    latest_reviews: int = Field(5, ge=0, description="Rows in the latest reviews card")

    # Insights metrics are computed over the most recent reviews only
    insights_review_limit: int = Field(100, ge=1)

    # Derived
    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list."""
        return [o.strip() for o in self.allowed_origins.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()


settings = get_settings()
