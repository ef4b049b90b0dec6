"""Mini README: Runtime configuration for the trip ledger.

Structure:
    * LedgerSettings - pydantic-settings model read from ``TRIPLEDGER_*``
      environment variables or a ``.env`` file.
    * get_settings - cached accessor shared by the store, the insight
      generator and the launcher.

Business rates (job values, helper bonuses) are not read here:
they are operator-edited data persisted by the store as ``RateSettings``
and passed explicitly into every calculation.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """Process-level configuration for storage, HTTP and insights."""

    model_config = SettingsConfigDict(
        env_prefix="TRIPLEDGER_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label controlling log verbosity and auto-reload.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the staff, trip, payment and settings JSON files.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the JSON API to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the JSON API listens on.",
        ge=1,
        le=65535,
    )
    gemini_api_key: Optional[str] = Field(
        None,
        description=(
            "API key for the Gemini text-generation service. Leave unset to"
            " disable insights; the generator then answers with a fixed notice."
        ),
    )
    gemini_model: str = Field(
        "gemini-2.5-flash",
        description="Model name used for the operational insight report.",
    )
    insights_timeout_seconds: float = Field(
        30.0,
        description="Timeout applied to the single insight request.",
        gt=0,
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Expand user directories and make sure the data directory exists."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path


@lru_cache()
def get_settings() -> LedgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return LedgerSettings()
