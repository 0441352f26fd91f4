"""
Configuration management for the Blob Storage quickstart.
"""

from src.config.settings import PublicAccessLevel, Settings, get_settings

__all__ = ["PublicAccessLevel", "Settings", "get_settings"]
