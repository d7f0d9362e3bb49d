"""Configuration helpers."""

from travel_companion.config.settings import AppSettings, resolve_settings

__all__ = ["AppSettings", "resolve_settings"]
