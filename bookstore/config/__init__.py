"""Configuration package."""

from bookstore.config.settings import BookstoreSettings, get_settings

__all__ = [
    "BookstoreSettings",
    "get_settings",
]
