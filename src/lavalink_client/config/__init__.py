"""
Configuration management for the Lavalink client.

This package provides configuration management including:
- The node connection configuration data structure
- Environment variable and .env file loading
- Default value management
"""

from .settings import LavalinkConfig, ConfigManager, config_manager

__all__ = [
    "LavalinkConfig",
    "ConfigManager",
    "config_manager",
]
