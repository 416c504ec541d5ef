"""
Environment-aware logging setup for the Lavalink client.

The ``ENVIRONMENT`` variable picks the default level (development: DEBUG,
staging: INFO, production: WARNING). Configuration comes from the
``logging.yaml`` shipped with the package; without it, or when an explicit
log file is requested, a console handler (plus that file) is used instead.
"""

import logging
import logging.config
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "logging.yaml"

# Frame and heartbeat traffic from these drowns the client's own DEBUG output
NOISY_LOGGERS = [
    "websockets",
    "websockets.client",
    "aiohttp.access",
    "aiohttp.client",
    "discord.gateway",
    "discord.client",
    "discord.voice_state",
]


class Environment(Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


ENVIRONMENT_LEVELS = {
    Environment.DEVELOPMENT: "DEBUG",
    Environment.STAGING: "INFO",
    Environment.PRODUCTION: "WARNING",
}


class LoggingManager:
    """Applies the YAML logging config, adjusted to the current environment."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self.environment = self._detect_environment()

    @staticmethod
    def _detect_environment() -> Environment:
        value = os.getenv("ENVIRONMENT", "development").lower()
        if value in ("prod", "production"):
            return Environment.PRODUCTION
        if value in ("stage", "staging"):
            return Environment.STAGING
        return Environment.DEVELOPMENT

    @property
    def default_level(self) -> str:
        return ENVIRONMENT_LEVELS[self.environment]

    def _load_yaml_config(self) -> Optional[Dict[str, Any]]:
        if not self.config_path.exists():
            return None
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except (yaml.YAMLError, OSError) as e:
            logging.getLogger(__name__).warning(
                f"Failed to load logging config {self.config_path}: {e}"
            )
            return None

    def _apply_production_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Raise every client logger and file handler to the production level."""
        if self.environment is not Environment.PRODUCTION:
            return config

        level = self.default_level
        if "root" in config:
            config["root"]["level"] = level
        for name, logger_config in config.get("loggers", {}).items():
            if name not in NOISY_LOGGERS:
                logger_config["level"] = level
        for name, handler_config in config.get("handlers", {}).items():
            if name.startswith("file_") and handler_config.get("level") == "DEBUG":
                handler_config["level"] = level
        return config

    @staticmethod
    def _ensure_log_directories(config: Dict[str, Any]) -> None:
        for handler_config in config.get("handlers", {}).values():
            filename = handler_config.get("filename")
            if filename:
                os.makedirs(os.path.dirname(filename) or ".", exist_ok=True)

    def setup_logging(
        self,
        component_name: str,
        log_level: Optional[str] = None,
        log_file: Optional[str] = None,
    ) -> logging.Logger:
        """
        Configure logging and return the component's logger.

        Args:
            component_name: Logger name, e.g. ``lavalink_client`` or ``check_node``
            log_level: Level override; defaults to the environment's level
            log_file: Log to this file next to the console, bypassing the YAML config

        Returns:
            The configured logger
        """
        level = (log_level or self.default_level).upper()
        config = None if log_file else self._load_yaml_config()

        if config:
            config = self._apply_production_overrides(config)
            self._ensure_log_directories(config)
            logging.config.dictConfig(config)
            logger = logging.getLogger(component_name)
            logger.setLevel(level)
        else:
            logger = self._setup_basic_logging(component_name, level, log_file)

        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
        return logger

    def _setup_basic_logging(
        self, component_name: str, level: str, log_file: Optional[str]
    ) -> logging.Logger:
        logger = logging.getLogger(component_name)
        logger.setLevel(level)
        logger.handlers.clear()

        if self.environment is Environment.PRODUCTION:
            fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            fmt = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
        formatter = logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S")

        handlers = [logging.StreamHandler()]
        if log_file:
            os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
            handlers.append(logging.FileHandler(log_file))
        for handler in handlers:
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger


_logging_manager = LoggingManager()


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Set up logging for a component using the package's logging config."""
    return _logging_manager.setup_logging(component_name, log_level, log_file)


def get_logger(component_name: str) -> logging.Logger:
    return logging.getLogger(component_name)
