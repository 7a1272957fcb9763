"""Application configuration loaded from environment variables."""

from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Centralised settings: no hardcoded values anywhere else."""

    # Google AI
    gemini_api_key: str = Field(..., min_length=1)
    gemini_model: str = Field("gemini-1.5-flash")

    # Generation config applied to every chat session
    gemini_temperature: float = Field(0.9, ge=0.0, le=2.0)
    gemini_top_k: int = Field(1, ge=1)
    gemini_top_p: float = Field(1.0, ge=0.0, le=1.0)
    gemini_max_output_tokens: int = Field(200, ge=1)
    gemini_system_instruction: Optional[str] = Field(None)
    # Unset means the SDK's own transport default applies.
    gemini_timeout_seconds: Optional[float] = Field(None, gt=0)

    # HTTP
    allowed_origins: str = Field("*")
    host: str = Field("0.0.0.0")
    port: int = Field(3005)

    # App
    app_env: str = Field("development")
    log_level: str = Field("INFO")

    # Derived
    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()
