"""
Centralized logging setup.

The LoggingManager singleton installs the configured handlers on the root
logger; every Log writes through the loggers beneath it.
"""

import logging
import logging.handlers
import sys
from typing import List, Optional

from .config import DEFAULT_LOG_FILE, LoggingConfig, load_config
from .formatters import (
    StructuredFormatter,
    create_console_formatter,
    create_rich_handler,
)
from .log import Log


class LoggingManager:
    """Centralized logging configuration and management."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self.config: Optional[LoggingConfig] = None
            self.handlers: List[logging.Handler] = []
            self._initialized = True

    def configure(self, config: LoggingConfig) -> None:
        """Replace the root handlers with the ones ``config`` asks for."""
        self.config = config

        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
        for handler in self.handlers:
            handler.close()
        self.handlers.clear()

        root_logger.setLevel(config.numeric_level)

        for output in config.output:
            if output == "console":
                self._add_console_handler(config)
            elif output == "file":
                self._add_file_handler(config)

    def _add_console_handler(self, config: LoggingConfig) -> None:
        if config.format == "rich":
            handler = create_rich_handler()
            handler.setFormatter(logging.Formatter("%(message)s"))
        elif config.format == "json":
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(
                StructuredFormatter(config.service_name, config.version)
            )
        else:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(create_console_formatter())
        self._install(handler, config)

    def _add_file_handler(self, config: LoggingConfig) -> None:
        """Add a size-rotated file handler."""
        file_path = config.file_path or DEFAULT_LOG_FILE
        file_path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.handlers.RotatingFileHandler(
            file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        if config.format == "json":
            handler.setFormatter(
                StructuredFormatter(config.service_name, config.version)
            )
        else:
            handler.setFormatter(create_console_formatter())
        self._install(handler, config)

    def _install(self, handler: logging.Handler, config: LoggingConfig) -> None:
        handler.setLevel(config.numeric_level)
        logging.getLogger().addHandler(handler)
        self.handlers.append(handler)

    def get_log(self, name: str) -> Log:
        return Log.named(name)


# Global logging manager instance
logging_manager = LoggingManager()


def configure_logging(config: Optional[LoggingConfig] = None) -> LoggingConfig:
    """Configure the global logging system.

    Without ``config``, configuration is loaded from the environment.
    """
    if config is None:
        config = load_config()
    logging_manager.configure(config)
    return config
