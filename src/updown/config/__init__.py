"""Configuration management for the up/down resolver."""

from .settings import ClobSettings, GammaSettings, ResolverSettings, Settings, get_settings

__all__ = ["ClobSettings", "GammaSettings", "ResolverSettings", "Settings", "get_settings"]
