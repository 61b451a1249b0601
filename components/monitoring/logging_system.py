# components/monitoring/logging_system.py
"""
Structured logging system for the air conditioner simulator.

Provides:
- Console and rotating JSON file output
- Event classification (device, process, command, voice, system)
- Bounded in-memory event history for diagnostics
- Cached, thread-safe logger factory
"""

import asyncio
import json
import logging
import logging.handlers
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

__all__ = [
    "EventSeverity",
    "EventCategory",
    "LogEntry",
    "ConsoleFormatter",
    "JSONFormatter",
    "DeviceLogger",
    "configure_logging",
    "get_logger",
]

# ----------------------------------------------------------------
# Event classification
# ----------------------------------------------------------------


class EventSeverity(Enum):
    """Event severity levels. Lower number = higher severity."""

    CRITICAL = 1
    ERROR = 3
    WARNING = 4
    NOTICE = 5  # Normal but significant events
    INFO = 6
    DEBUG = 7


class EventCategory(Enum):
    """Event categories."""

    DEVICE = "device"  # Power and mode changes
    PROCESS = "process"  # Temperature change process lifecycle
    COMMAND = "command"  # Commands dispatched by the router
    VOICE = "voice"  # Recognition and synthesis
    SYSTEM = "system"  # Startup, shutdown, configuration


LOGGING_TO_SEVERITY = {
    logging.CRITICAL: EventSeverity.CRITICAL,
    logging.ERROR: EventSeverity.ERROR,
    logging.WARNING: EventSeverity.WARNING,
    logging.INFO: EventSeverity.INFO,
    logging.DEBUG: EventSeverity.DEBUG,
}

SEVERITY_TO_LOGGING = {
    EventSeverity.CRITICAL: logging.CRITICAL,
    EventSeverity.ERROR: logging.ERROR,
    EventSeverity.WARNING: logging.WARNING,
    EventSeverity.NOTICE: logging.INFO,
    EventSeverity.INFO: logging.INFO,
    EventSeverity.DEBUG: logging.DEBUG,
}


# ----------------------------------------------------------------
# Structured log entry
# ----------------------------------------------------------------


@dataclass
class LogEntry:
    """Structured log entry."""

    wall_time: float
    severity: EventSeverity
    category: EventCategory
    message: str

    device: str = ""
    component: str = ""

    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialisation."""
        entry_dict = {
            "wall_time": self.wall_time,
            "severity": self.severity.name,
            "category": self.category.value,
            "message": self.message,
        }

        if self.device:
            entry_dict["device"] = self.device
        if self.component:
            entry_dict["component"] = self.component
        if self.data:
            entry_dict["data"] = self.data

        return entry_dict

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict())

    def to_human_readable(self) -> str:
        """Convert to human-readable format."""
        severity_str = f"[{self.severity.name:8s}]"
        category_str = f"[{self.category.value}]"
        device_str = f"{self.device}: " if self.device else ""

        return f"{severity_str} {category_str} {device_str}{self.message}"


# ----------------------------------------------------------------
# Formatters
# ----------------------------------------------------------------


class ConsoleFormatter(logging.Formatter):
    """Plain console format with the device name when known."""

    def __init__(self, device: str = ""):
        prefix = f"{device}: " if device else ""
        super().__init__(
            fmt=f"%(asctime)s [%(levelname)8s] %(name)s: {prefix}%(message)s"
        )


class JSONFormatter(logging.Formatter):
    """Format log records as JSON lines."""

    def __init__(self, device: str = ""):
        super().__init__()
        self.device = device

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        severity = LOGGING_TO_SEVERITY.get(record.levelno, EventSeverity.INFO)

        log_entry = LogEntry(
            wall_time=record.created,
            severity=severity,
            category=getattr(record, "category", EventCategory.SYSTEM),
            message=record.getMessage(),
            device=self.device,
            component=record.name,
        )

        if record.exc_info:
            log_entry.data["exception"] = self.formatException(record.exc_info)

        return log_entry.to_json()


# ----------------------------------------------------------------
# Device logger
# ----------------------------------------------------------------


class DeviceLogger:
    """
    Logger for simulated devices and their controllers.

    Wraps Python's logging with:
    - Console output
    - Rotating JSON file output (when a log directory is configured)
    - Structured events kept in a bounded in-memory history
    """

    def __init__(
        self,
        name: str,
        device: str = "",
        log_dir: Path | None = None,
        level: int = logging.DEBUG,
        enable_json: bool = True,
        enable_console: bool = True,
        max_history_entries: int = 1000,
    ):
        """
        Initialise device logger.

        Args:
            name: Logger name (typically class or module name)
            device: Device name for context
            log_dir: Directory for log files (None = no file logging)
            level: Minimum level emitted by the handlers
            enable_json: Enable JSON formatted logs (requires log_dir)
            enable_console: Enable console output
            max_history_entries: Maximum structured events to retain
        """
        self.name = name
        self.device = device
        self.log_dir = log_dir
        self.level = level

        logger_name = f"{name}.{device}" if device else name
        self.logger = logging.getLogger(logger_name)
        self.logger.setLevel(level)
        self.logger.propagate = False

        self.logger.handlers.clear()

        if enable_console:
            self._add_console_handler()

        if enable_json and log_dir:
            self._add_json_handler()

        self.history: list[LogEntry] = []
        self._history_lock = asyncio.Lock()
        self._max_history_entries = max_history_entries

    def _add_console_handler(self) -> None:
        """Add console handler."""
        handler = logging.StreamHandler()
        handler.setLevel(self.level)
        handler.setFormatter(ConsoleFormatter(self.device))
        self.logger.addHandler(handler)

    def _add_json_handler(self) -> None:
        """Add JSON file handler with rotation."""
        if not self.log_dir:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        log_file = self.log_dir / f"{self.device or 'system'}.json.log"

        # Rotating file handler (10MB max, 5 backups)
        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
        )
        handler.setLevel(self.level)
        handler.setFormatter(JSONFormatter(device=self.device))
        self.logger.addHandler(handler)

    # ----------------------------------------------------------------
    # Standard logging methods
    # ----------------------------------------------------------------

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log info message."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log error message."""
        self.logger.error(message, **kwargs)

    def exception(self, message: str, **kwargs) -> None:
        """Log exception with traceback."""
        self.logger.exception(message, **kwargs)

    # ----------------------------------------------------------------
    # Structured events
    # ----------------------------------------------------------------

    async def log_event(
        self,
        severity: EventSeverity,
        category: EventCategory,
        message: str,
        **data: Any,
    ) -> LogEntry:
        """
        Log structured event and keep it in the history.

        Args:
            severity: Event severity level
            category: Event category
            message: Event message
            **data: Additional context stored with the entry

        Returns:
            LogEntry that was created
        """
        entry = LogEntry(
            wall_time=time.time(),
            severity=severity,
            category=category,
            message=message,
            device=self.device,
            component=self.name,
            data=data,
        )

        self.logger.log(
            SEVERITY_TO_LOGGING.get(severity, logging.INFO),
            message,
            extra={"category": category},
        )

        async with self._history_lock:
            self.history.append(entry)
            if len(self.history) > self._max_history_entries:
                self.history = self.history[-self._max_history_entries :]

        return entry

    async def get_event_history(
        self,
        limit: int = 100,
        category: EventCategory | None = None,
    ) -> list[LogEntry]:
        """
        Get structured events (most recent last).

        Args:
            limit: Maximum number of entries to return
            category: Filter by category
        """
        async with self._history_lock:
            entries = self.history
            if category:
                entries = [e for e in entries if e.category == category]
            return entries[-limit:]

    async def clear_event_history(self) -> int:
        """Clear the history, returning the number of entries removed."""
        async with self._history_lock:
            count = len(self.history)
            self.history.clear()
            return count


# ----------------------------------------------------------------
# Global logger factory
# ----------------------------------------------------------------

_loggers: dict[str, DeviceLogger] = {}
_loggers_lock = threading.Lock()
_default_log_dir: Path | None = None
_default_level: int = logging.DEBUG
_default_json: bool = True


def configure_logging(
    log_dir: Path | str | None = None,
    level: int | str = logging.DEBUG,
    enable_json: bool = True,
) -> None:
    """
    Configure global logging settings.

    Applies to loggers created after this call.

    Args:
        log_dir: Directory for log files
        level: Logging level (name or number)
        enable_json: Write JSON log files when log_dir is set
    """
    global _default_log_dir, _default_level, _default_json

    if log_dir:
        _default_log_dir = Path(log_dir)
        _default_log_dir.mkdir(parents=True, exist_ok=True)
    else:
        _default_log_dir = None

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level: {level}")
        level = resolved

    _default_level = level
    _default_json = enable_json

    with _loggers_lock:
        _loggers.clear()


def get_logger(name: str, device: str = "", **kwargs) -> DeviceLogger:
    """
    Get or create a device logger.

    Thread-safe logger factory.

    Args:
        name: Logger name (typically class name or __name__)
        device: Device name for context
        **kwargs: Additional DeviceLogger arguments

    Returns:
        DeviceLogger instance
    """
    logger_key = f"{name}:{device}"

    with _loggers_lock:
        if logger_key not in _loggers:
            kwargs.setdefault("log_dir", _default_log_dir)
            kwargs.setdefault("level", _default_level)
            kwargs.setdefault("enable_json", _default_json)

            _loggers[logger_key] = DeviceLogger(name, device, **kwargs)

        return _loggers[logger_key]
