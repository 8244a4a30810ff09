"""Logging utilities for the gac tool."""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "gac"


class GacLogger:
    """Logger wrapper with rich console output and a debug log file."""

    _handlers_setup = False

    def __init__(self, name: str = ROOT_LOGGER_NAME, level: Optional[str] = None):
        """Initialize logger.

        Child loggers are left unset so they inherit the root "gac" level.

        Args:
            name: Logger name
            level: Explicit log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        self.logger = logging.getLogger(name)
        if level:
            self.logger.setLevel(getattr(logging, level.upper()))

        # Handlers live on the root "gac" logger only
        if not GacLogger._handlers_setup:
            root_logger = logging.getLogger(ROOT_LOGGER_NAME)
            if not root_logger.handlers:
                self._setup_handlers(root_logger)
            GacLogger._handlers_setup = True

        if name != ROOT_LOGGER_NAME:
            self.logger.propagate = True

    def _setup_handlers(self, logger: logging.Logger) -> None:
        """Setup console and file handlers."""
        # Handlers filter by level; the logger itself passes everything through
        logger.setLevel(logging.DEBUG)

        console_handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            rich_tracebacks=True,
        )
        console_handler.setLevel(logging.INFO)
        logger.addHandler(console_handler)

        log_dir = Path.home() / ".gac" / "logs"
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            # Read-only home; console logging still works
            return

        file_handler = logging.FileHandler(log_dir / "gac.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs) -> None:
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self.logger.error(message, **kwargs)

    def exception(self, message: str, **kwargs) -> None:
        """Log exception with traceback."""
        self.logger.exception(message, **kwargs)


logger = GacLogger()


def get_logger(name: Optional[str] = None, level: Optional[str] = None) -> GacLogger:
    """Get logger instance.

    Args:
        name: Logger name (defaults to 'gac')
        level: Explicit log level (inherited from 'gac' if None)

    Returns:
        Logger instance
    """
    if name is None:
        return logger
    return GacLogger(name, level)


def enable_verbose_logging() -> None:
    """Switch the console handler to DEBUG."""
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    for handler in root_logger.handlers:
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(logging.DEBUG)

    logger.debug("Verbose logging enabled")
