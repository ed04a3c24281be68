"""Configuration helpers for imagify.

Expose `get_settings` as the canonical accessor for environment-driven
defaults.
"""

from .settings import DEFAULT_DPI, ImagifySettings, get_settings


__all__ = ["DEFAULT_DPI", "ImagifySettings", "get_settings"]
