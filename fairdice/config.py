"""Application configuration using Pydantic Settings."""

from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    # Commitment
    key_bytes: int = 32  # 256-bit HMAC keys
    first_move_range: int = 2

    # Probability estimation
    simulation_trials: int = 1000
    simulation_workers: int = 1
    probability_precision: int = 4

    # Game Configuration
    min_dice: int = 3
    max_dice: int = 10  # per request; estimation cost grows with the square
    roll_modulus: Optional[int] = None  # None => face count of the rolled die

    # Application
    app_env: str = "dev"
    app_version: str = "1"
    log_level: str = "INFO"

    # CORS
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    @field_validator("key_bytes")
    @classmethod
    def _key_at_least_256_bits(cls, v: int) -> int:
        if v < 32:
            raise ValueError("key_bytes must be at least 32 (256 bits)")
        return v

    @field_validator("min_dice")
    @classmethod
    def _two_players_need_three_dice(cls, v: int) -> int:
        if v < 3:
            raise ValueError("min_dice must be at least 3")
        return v

    @field_validator("simulation_trials", "simulation_workers", "max_dice")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("roll_modulus")
    @classmethod
    def _modulus_positive(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("roll_modulus must be positive when set")
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


# Global settings instance
settings = Settings()
