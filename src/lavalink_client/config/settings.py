"""
Configuration management for the Lavalink client.

This module loads node connection settings from the environment, optionally
seeded from a ``.env`` file.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from lavalink_client.core.types import (
    DEFAULT_CLIENT_NAME,
    DEFAULT_HOST,
    DEFAULT_NODE_ID,
    DEFAULT_PORT,
    ENV_LAVALINK_CLIENT_NAME,
    ENV_LAVALINK_HOST,
    ENV_LAVALINK_MAX_RETRIES,
    ENV_LAVALINK_NODE_ID,
    ENV_LAVALINK_NUM_SHARDS,
    ENV_LAVALINK_PASSWORD,
    ENV_LAVALINK_PORT,
    ENV_LAVALINK_RESUME_KEY,
    ENV_LAVALINK_RETRY_DELAY,
    ENV_LAVALINK_SECURE,
    ENV_LAVALINK_USER_ID,
    ENV_LOG_LEVEL,
)
from lavalink_client.infrastructure.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class LavalinkConfig:
    """Connection settings for a Lavalink node."""

    # Required configuration
    password: str
    user_id: int

    # Optional configuration with defaults
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    secure: bool = False
    num_shards: int = 1
    node_id: str = DEFAULT_NODE_ID
    client_name: str = DEFAULT_CLIENT_NAME
    resume_key: Optional[str] = None
    log_level: str = "INFO"
    max_retries: int = 5
    retry_delay: float = 1.0

    def __post_init__(self):
        """Post-initialization validation."""
        if not 0 < self.port < 65536:
            raise ConfigurationError(f"Invalid port: {self.port}")
        if self.num_shards < 1:
            raise ConfigurationError("num_shards must be at least 1")


class ConfigManager:
    """Loads ``LavalinkConfig`` from environment variables."""

    def __init__(self, env_file_path: str = ".env"):
        """
        Initialize configuration manager.

        Args:
            env_file_path: Path to environment file
        """
        self.env_file_path = env_file_path
        self._load_environment()

    def _load_environment(self):
        """Load environment variables from file."""
        if os.path.exists(self.env_file_path):
            load_dotenv(dotenv_path=self.env_file_path)
            logger.info(f"Loaded environment from {self.env_file_path}")
        else:
            logger.debug(f"Environment file {self.env_file_path} not found")

    def _get_required_env(self, key: str) -> str:
        """
        Get required environment variable.

        Raises:
            ConfigurationError: If environment variable is not set
        """
        value = os.getenv(key)
        if not value:
            raise ConfigurationError(f"Required environment variable {key} is not set")
        return value

    def _get_optional_env(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return os.getenv(key, default)

    def _get_int_env(self, key: str, default: Optional[int] = None) -> int:
        raw = os.getenv(key)
        if raw is None or raw == "":
            if default is None:
                raise ConfigurationError(f"Required environment variable {key} is not set")
            return default
        try:
            return int(raw)
        except ValueError:
            raise ConfigurationError(f"{key} must be an integer, got '{raw}'") from None

    def _get_float_env(self, key: str, default: float) -> float:
        raw = os.getenv(key)
        if raw is None or raw == "":
            return default
        try:
            return float(raw)
        except ValueError:
            raise ConfigurationError(f"{key} must be a number, got '{raw}'") from None

    def _get_bool_env(self, key: str, default: bool = False) -> bool:
        raw = os.getenv(key)
        if raw is None or raw == "":
            return default
        return raw.strip().lower() in ("1", "true", "yes", "on")

    def get_config(self) -> LavalinkConfig:
        """
        Get the client configuration.

        Returns:
            LavalinkConfig: Node connection settings

        Raises:
            ConfigurationError: If required configuration is missing or invalid
        """
        try:
            config = LavalinkConfig(
                password=self._get_required_env(ENV_LAVALINK_PASSWORD),
                user_id=self._get_int_env(ENV_LAVALINK_USER_ID),
                host=self._get_optional_env(ENV_LAVALINK_HOST, DEFAULT_HOST),
                port=self._get_int_env(ENV_LAVALINK_PORT, DEFAULT_PORT),
                secure=self._get_bool_env(ENV_LAVALINK_SECURE),
                num_shards=self._get_int_env(ENV_LAVALINK_NUM_SHARDS, 1),
                node_id=self._get_optional_env(ENV_LAVALINK_NODE_ID, DEFAULT_NODE_ID),
                client_name=self._get_optional_env(
                    ENV_LAVALINK_CLIENT_NAME, DEFAULT_CLIENT_NAME
                ),
                resume_key=self._get_optional_env(ENV_LAVALINK_RESUME_KEY) or None,
                log_level=self._get_optional_env(ENV_LOG_LEVEL, "INFO"),
                max_retries=self._get_int_env(ENV_LAVALINK_MAX_RETRIES, 5),
                retry_delay=self._get_float_env(ENV_LAVALINK_RETRY_DELAY, 1.0),
            )
        except ConfigurationError as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

        logger.info(f"Configuration loaded for node {config.node_id} at {config.host}:{config.port}")
        return config


# Global configuration manager instance
config_manager = ConfigManager()
