"""Logging infrastructure with Rich console output and rotating file logs."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

DOCSTATS_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "red bold",
        "success": "green bold",
        "highlight": "magenta",
    }
)


class DocStatsLogger:
    """Owns the package logger and the shared Rich console."""

    _instance: Optional["DocStatsLogger"] = None
    _initialized: bool = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self.console = Console(theme=DOCSTATS_THEME, stderr=True)
            self.logger = logging.getLogger("docstats")
            self._initialized = True

    def setup(
        self,
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        console_enabled: bool = True,
        file_enabled: bool = False,
    ):
        """
        Configure logging handlers and formatters.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files
            max_bytes: Maximum size of each log file before rotation
            backup_count: Number of rotated log files to keep
            console_enabled: Enable console (Rich) logging
            file_enabled: Enable file logging
        """
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        log_level = getattr(logging, level.upper(), logging.INFO)
        self.logger.setLevel(log_level)
        self.logger.propagate = False

        if console_enabled:
            console_handler = RichHandler(
                console=self.console,
                rich_tracebacks=True,
                show_time=True,
                show_path=False,
                markup=False,
            )
            console_handler.setLevel(log_level)
            self.logger.addHandler(console_handler)

        if file_enabled:
            log_dir = Path(log_dir) if log_dir is not None else Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = RotatingFileHandler(
                log_dir / "docstats.log",
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(
                logging.Formatter(
                    fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            file_handler.setLevel(log_level)
            self.logger.addHandler(file_handler)

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """Get the package logger, or a child logger when a name is given."""
        if name:
            if name.startswith("docstats."):
                name = name[len("docstats.") :]
            return self.logger.getChild(name)
        return self.logger


_logger_instance: Optional[DocStatsLogger] = None


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance.

    The package logger is configured with console defaults (WARNING level)
    the first time this is called, until ``setup_logging`` replaces them.

    Args:
        name: Optional logger name for component-specific logging

    Returns:
        Configured logger instance
    """
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = DocStatsLogger()
        _logger_instance.setup(level="WARNING")
    return _logger_instance.get_logger(name)


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[Path] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    console_enabled: bool = True,
    file_enabled: bool = False,
):
    """Configure global logging settings. See ``DocStatsLogger.setup``."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = DocStatsLogger()
    _logger_instance.setup(level, log_dir, max_bytes, backup_count, console_enabled, file_enabled)


def get_console() -> Console:
    """Get the Rich console instance used for log output."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = DocStatsLogger()
    return _logger_instance.console
