"""Core: config, exception handlers and service bootstrap."""

from topology.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
