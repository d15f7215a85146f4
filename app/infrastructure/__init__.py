# app/infrastructure/__init__.py
"""
Infrastructure Module
Contains adapters for infrastructure concerns.
"""

from app.infrastructure.cache import CacheAdapter, InMemoryCache

__all__ = [
    "CacheAdapter",
    "InMemoryCache",
]
