"""Application configuration using pydantic-settings.

All environment variables should be accessed through the settings object
rather than using os.getenv() directly. Dispatch tuning (nearby radius,
ranking window, pricing constants) lives here so the services and the tests
agree on a single set of numbers.
"""

from decimal import Decimal
from functools import lru_cache
from typing import List, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    app_name: str = "Stadium Runner"

    # CORS - comma-separated origins or "*" for development only
    cors_origins: str = "http://localhost:3000,http://localhost:8000"

    # Demo data / mocked auth
    seed_demo_data: bool = True
    demo_runner_id: str = "runner1"

    # ==========================================================================
    # Dispatch
    # ==========================================================================
    nearby_radius_meters: int = 200
    nearby_max_results: int = 10
    age_priority_window_ms: int = 300_000  # 5 minutes

    # Walking model
    walking_speed_mps: float = 1.4
    handoff_buffer_minutes: int = 2

    # ETA shown to the customer at checkout (inclusive bounds)
    eta_min_minutes: int = 8
    eta_max_minutes: int = 17

    # ==========================================================================
    # Pricing
    # ==========================================================================
    tax_rate: Decimal = Decimal("0.07")
    service_fee: Decimal = Decimal("1.99")
    batch_base_payout: Decimal = Decimal("2.50")

    # Server
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_public_writes: str = "30/minute"
    rate_limit_reads: str = "120/minute"

    @field_validator("eta_max_minutes")
    @classmethod
    def validate_eta_window(cls, v: int, info) -> int:
        low = info.data.get("eta_min_minutes", 0)
        if v < low:
            raise ValueError(f"eta_max_minutes ({v}) must be >= eta_min_minutes ({low})")
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
