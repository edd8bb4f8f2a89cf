"""Logger manager with colored console output, JSON records and file rotation.

Library modules log through ``logging.getLogger(__name__)``; the CLI installs
handlers on the ``buildstamp`` logger through :class:`LoggerManager` so every
module inherits them.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
import datetime
import json
import logging
from logging import Handler, Logger, LogRecord, getLevelName
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys
from typing import Any, ClassVar

import colorlog

ROOT_LOGGER_NAME = "buildstamp"


@dataclass
class LoggerConfig:
    """Configuration for LoggerManager."""

    log_level: str = "WARNING"
    log_dir: Path | None = None
    log_file_name: str = "buildstamp.log"
    max_file_size_mb: int = 5
    backup_count: int = 3
    structured_logging: bool = False
    log_filters: dict[str, Callable[[LogRecord], bool]] | None = None
    log_colors: dict[str, str] = field(default_factory=dict)

    DEFAULT_LOG_COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "red,bg_white",
    }

    def __post_init__(self) -> None:
        """Normalize level and directory, fill default colors."""
        self.log_level = self.log_level.upper()
        if self.log_dir is not None:
            self.log_dir = Path(self.log_dir).resolve()
        self.log_colors = self.log_colors or dict(self.DEFAULT_LOG_COLORS)


class StructuredFormatter(logging.Formatter):
    """Render records as single-line JSON objects."""

    def format(self, record: LogRecord) -> str:
        payload = {
            "timestamp": datetime.datetime.fromtimestamp(
                record.created, tz=datetime.UTC
            ).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
            "context": getattr(record, "context", {}),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class LoggerSettings:
    """Builds the console and file handlers described by a LoggerConfig."""

    def __init__(self, config: LoggerConfig) -> None:
        self.config = config

    def get_handlers(self) -> list[Handler]:
        handlers = [self._get_console_handler()]
        file_handler = self._get_file_handler()
        if file_handler is not None:
            handlers.append(file_handler)
        return handlers

    def _apply_filters(self, handler: Handler) -> None:
        if self.config.log_filters:
            for filter_fn in self.config.log_filters.values():
                handler.addFilter(filter_fn)

    def _get_console_handler(self) -> Handler:
        handler = colorlog.StreamHandler(sys.stderr)
        formatter: logging.Formatter = (
            StructuredFormatter()
            if self.config.structured_logging
            else colorlog.ColoredFormatter(
                "%(log_color)s[%(levelname)s] %(name)s: %(message)s",
                log_colors=self.config.log_colors,
            )
        )
        handler.setFormatter(formatter)
        self._apply_filters(handler)
        return handler

    def _get_file_handler(self) -> RotatingFileHandler | None:
        if self.config.log_dir is None:
            return None
        file_path = self.config.log_dir / self.config.log_file_name
        try:
            self.config.log_dir.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                file_path,
                maxBytes=self.config.max_file_size_mb * 1024 * 1024,
                backupCount=self.config.backup_count,
                encoding="utf-8",
            )
        except OSError as e:
            print(f"Failed to create RotatingFileHandler: {e}", file=sys.stderr)
            return None
        handler.setFormatter(
            StructuredFormatter()
            if self.config.structured_logging
            else logging.Formatter(
                "%(asctime)s - [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        self._apply_filters(handler)
        return handler


class ContextAdapter(logging.LoggerAdapter):
    """Adapter that attaches a fixed ``context`` mapping to every record."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = dict(kwargs.get("extra") or {})
        merged = {**(self.extra or {}), **extra.get("context", {})}
        extra["context"] = merged
        kwargs["extra"] = extra
        return msg, kwargs


class LoggerManager:
    """Configures the ``buildstamp`` logger hierarchy once per process.

    Reconfiguring replaces the handlers previously installed by a manager, so
    repeated CLI invocations in one interpreter do not duplicate output.
    """

    def __init__(
        self,
        config: LoggerConfig | None = None,
        name: str = ROOT_LOGGER_NAME,
    ) -> None:
        self.name = name
        self.config = config or LoggerConfig()
        self.settings = LoggerSettings(self.config)
        self._handlers: list[Handler] = []
        self._logger = self._configure_logger()

    def _configure_logger(self) -> Logger:
        logger = logging.getLogger(self.name)
        for handler in list(logger.handlers):
            if getattr(handler, "_buildstamp_managed", False):
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(getLevelName(self.config.log_level))
        for handler in self.settings.get_handlers():
            handler._buildstamp_managed = True  # type: ignore[attr-defined]
            logger.addHandler(handler)
            self._handlers.append(handler)
        logger.propagate = False
        return logger

    def get_logger(self) -> Logger:
        return self._logger

    @contextmanager
    def context(self, **context_kwargs: Any) -> Iterator[logging.LoggerAdapter]:
        """Yield an adapter that tags records with structured context."""
        yield ContextAdapter(self._logger, context_kwargs)

    def add_filter(self, name: str, filter_fn: Callable[[LogRecord], bool]) -> None:
        if self.config.log_filters is None:
            self.config.log_filters = {}
        self.config.log_filters[name] = filter_fn
        for handler in self._handlers:
            handler.addFilter(filter_fn)

    def flush(self) -> None:
        for handler in self._handlers:
            handler.flush()

    def close(self) -> None:
        """Detach and close the handlers this manager installed."""
        for handler in self._handlers:
            self._logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()


__all__ = [
    "ROOT_LOGGER_NAME",
    "ContextAdapter",
    "LoggerConfig",
    "LoggerManager",
    "LoggerSettings",
    "StructuredFormatter",
]
