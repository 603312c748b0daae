"""Core: config, lifespan, and exception handlers.

Single place for settings and application bootstrap.
"""

from itam.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
