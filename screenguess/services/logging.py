"""Logging configuration service for the screenguess engine.

Events are structured with structlog and routed through stdlib handlers.
Keys that can carry a secret are masked before any renderer sees them.
"""

import logging
import logging.handlers
import os
import sys
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any

import structlog

from .errors import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Event keys whose values are never written out
SECRET_KEYS = frozenset({"signing_secret", "admin_key", "secret", "access_token"})
MASK = "***"

APP_LOG_NAME = "app.log"
ERROR_LOG_NAME = "error.log"


def mask_secrets(
    logger: Any,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """structlog processor replacing secret values with a fixed mask."""
    for key in SECRET_KEYS.intersection(event_dict):
        if event_dict[key] is not None:
            event_dict[key] = MASK
    return event_dict


class LoggingService:
    """Service for configuring engine logging."""

    def __init__(
        self,
        log_level: str = "INFO",
        log_dir: Path | None = None,
        console: bool = True,
    ) -> None:
        """Initialize the logging service.

        Args:
            log_level: One of ``LOG_LEVELS``, case-insensitive
            log_dir: Directory for rotating log files (None for console only)
            console: If False, only file handlers are attached (hosts that
                own stdout)

        Raises:
            ConfigurationError: If the level is not a known level name
        """
        level = str(log_level).upper()
        if level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level: {log_level}",
                setting="log_level",
                expected=", ".join(LOG_LEVELS),
            )

        self.log_level = level
        self.log_dir = log_dir
        self.console = console
        self.is_development = os.getenv("ENVIRONMENT", "development") == "development"

    @property
    def numeric_level(self) -> int:
        return getattr(logging, self.log_level)

    @property
    def renders_json(self) -> bool:
        """JSON everywhere except a development console with no log files."""
        return not self.is_development or self.log_dir is not None

    def configure(self) -> None:
        """Configure structlog and the stdlib handlers it writes through."""
        self._configure_handlers()

        structlog.configure(
            processors=self._get_processors(),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def _configure_handlers(self) -> None:
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(self.numeric_level)

        if self.console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(self.numeric_level)
            if self.renders_json:
                console_handler.setFormatter(logging.Formatter("%(message)s"))
            else:
                console_handler.setFormatter(logging.Formatter(
                    fmt="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
                    datefmt="%H:%M:%S",
                ))
            root_logger.addHandler(console_handler)

        if self.log_dir is not None:
            for handler in self._file_handlers(self.log_dir):
                root_logger.addHandler(handler)

    def _file_handlers(self, log_dir: Path) -> list[logging.Handler]:
        """Rotating app log at the configured level, plus an error-only log."""
        log_dir.mkdir(parents=True, exist_ok=True)
        formatter = logging.Formatter("%(message)s")

        app_handler = logging.handlers.RotatingFileHandler(
            filename=log_dir / APP_LOG_NAME,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        app_handler.setLevel(self.numeric_level)
        app_handler.setFormatter(formatter)

        error_handler = logging.handlers.RotatingFileHandler(
            filename=log_dir / ERROR_LOG_NAME,
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)

        return [app_handler, error_handler]

    def _get_processors(self) -> list[Any]:
        processors: list[Any] = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            mask_secrets,
        ]

        if self.renders_json:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        return processors

    def get_logger(self, name: str | None = None) -> structlog.stdlib.BoundLogger:
        return structlog.stdlib.get_logger(name)


def setup_logging(
    log_level: str = "INFO",
    log_dir: Path | None = None,
    environment: str | None = None,
    console: bool = True,
) -> LoggingService:
    """Set up engine logging.

    Args:
        log_level: Minimum log level to capture
        log_dir: Directory for log files (None for console only)
        environment: Environment name (development/production)
        console: Attach a stdout handler

    Returns:
        Configured LoggingService instance
    """
    if environment:
        os.environ["ENVIRONMENT"] = environment

    service = LoggingService(log_level=log_level, log_dir=log_dir, console=console)
    service.configure()
    return service
