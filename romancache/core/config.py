from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strongly typed configuration sourced from ROMANCACHE_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ROMANCACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Literal["dev", "test", "staging", "prod"] = Field(default="dev")
    log_level: str = Field(default="INFO")

    default_strategy: str = Field(default="sequential", min_length=1)
    parallel_workers: int = Field(default=4, ge=1, le=64, description="Thread pool size for partitioned work")
    parallel_chunk_size: int = Field(default=50_000, ge=1, description="Values per partition handed to a worker")

    top_n: int = Field(default=5, ge=1)
    demo_sample_size: int = Field(default=200_000, ge=0)

    instrumentation_enabled: bool = Field(default=True)
    slow_operation_threshold_seconds: float = Field(default=1.0, gt=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> str:
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        if not isinstance(value, str):
            raise TypeError("LOG_LEVEL must be a level name such as INFO or DEBUG")
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown log level: {value}")
        return normalized

    @field_validator("default_strategy", mode="before")
    @classmethod
    def _normalize_strategy(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @computed_field(return_type=bool)
    def is_production(self) -> bool:
        return self.environment == "prod"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
