"""Library configuration via environment variables with REDENOM_ prefix."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Redenomination engine configuration.

    All settings are read from environment variables prefixed with ``REDENOM_``.
    The defaults reproduce the built-in behaviour, so an empty environment is
    always a valid configuration.
    """

    model_config = SettingsConfigDict(env_prefix="REDENOM_")

    # ── Formatting ──────────────────────────────────────────────────────────
    default_locale: str = "en-US"
    default_decimals: int = Field(default=2, ge=0)

    # ── Conversion ──────────────────────────────────────────────────────────
    default_rounding: Literal["round", "floor", "ceil", "none"] = "round"

    # ── Logging ─────────────────────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool = True
