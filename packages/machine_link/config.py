"""Centralized configuration using Pydantic Settings

All environment variables (MACHINE_*) are managed here.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from machine_core.state import ValidationPolicy


class Settings(BaseSettings):
    """Node settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="MACHINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Node identity
    machine_num: int = 0
    next_node: int = 0
    sequence_length: int = Field(default=4, ge=1)

    # OSC listener
    listen_host: str = "0.0.0.0"
    listen_port: int = Field(default=9000, ge=1024, le=65535)

    # Peer table (YAML or JSON)
    peers_file: Path | None = None

    # Seconds between full-state publishes to next_node
    publish_interval: float = Field(default=0.5, gt=0)

    # Decoded frame invariant handling
    validation_policy: Literal["clamp", "reject", "trust"] = "clamp"

    debug: bool = False

    @property
    def policy(self) -> ValidationPolicy:
        return ValidationPolicy(self.validation_policy)


# Global settings instance
settings = Settings()
