"""Configuration helpers for the trade analyzer engine."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TOP_SYMBOLS_LIMIT = 5
UNKNOWN_LABEL = "Unknown"
STOCK_OPTION_CLASS = "stock"


class AnalyzerSettings(BaseSettings):
    """Tunables for matching and aggregation."""

    model_config = SettingsConfigDict(
        env_prefix="TRADE_ANALYZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    top_symbols_limit: int = Field(default=DEFAULT_TOP_SYMBOLS_LIMIT, ge=0)
    fallback_pl_by_type: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Rows reported as P/L by type when no trade was closed.",
    )
    stock_option_class: str = Field(default=STOCK_OPTION_CLASS)


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AnalyzerSettings:
    """Return cached analyzer settings with optional overrides."""

    if overrides:
        return AnalyzerSettings(**overrides)
    return AnalyzerSettings()


__all__ = [
    "AnalyzerSettings",
    "DEFAULT_TOP_SYMBOLS_LIMIT",
    "STOCK_OPTION_CLASS",
    "UNKNOWN_LABEL",
    "get_settings",
]
