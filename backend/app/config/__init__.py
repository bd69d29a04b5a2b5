"""Configuration package for the trade analyzer service."""

from .settings import AppSettings, get_settings

__all__ = ["AppSettings", "get_settings"]
