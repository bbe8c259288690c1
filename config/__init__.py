"""Configuration management for the YouTube MCP Server."""

from .settings import ConfigurationError, Settings, get_settings
from .logging_config import setup_logging

__all__ = [
    "ConfigurationError",
    "Settings",
    "get_settings",
    "setup_logging",
]
