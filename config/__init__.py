"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Function to get settings (for dependency injection)
    ApifyConfig: Scrape client configuration built from settings
"""

from config.settings import settings, get_settings, Settings
from config.apify import ApifyConfig

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # Integrations
    "ApifyConfig",
]
