"""Configuration for the gateway metrics exporter"""
from enum import Enum
from pathlib import Path
from typing import Literal, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CounterPolicy(str, Enum):
    """How the service mapper folds a reported count into its counter sample"""
    SET = "set"
    ACCUMULATE = "accumulate"


class Config(BaseSettings):
    """Configuration class with Pydantic validation and environment-based settings"""

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    # Service settings
    service_name: str = Field(default="gateway-metrics-exporter", description="Service name")
    service_version: str = Field(default="1.0.0", description="Service version")

    # Mapping settings
    service_counter_policy: CounterPolicy = Field(
        default=CounterPolicy.SET,
        description="Replace service counters with the latest value (set) or add to them (accumulate)"
    )
    legacy_service_counters_enabled: bool = Field(
        default=True,
        description="Read per-service request counters embedded in the system overview payload"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Log file path (console only when unset)")

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator('log_file')
    @classmethod
    def ensure_log_directory(cls, v):
        if isinstance(v, Path):
            v.parent.mkdir(parents=True, exist_ok=True)
        return v

    def is_accumulating(self) -> bool:
        """Check if service counters are summed across calls"""
        return self.service_counter_policy == CounterPolicy.ACCUMULATE
