# browserkit/core/logger.py
"""
Structured logging for browserkit.

structlog renders every event, and the standard library owns the handlers,
so framework output and third-party output (Playwright, pytest) can share a
console stream and a rotating log file.

Two context variables are stamped onto every event when set:
``correlation_id`` groups the events of one logical operation and
``test_id`` names the pytest node that produced them.

Nothing is configured at import time. The first ``get_logger()`` call reads
``Settings.logging``; ``setup_logging()`` replaces that configuration.
"""

import logging
import logging.handlers
import sys
import threading
import time
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from uuid import uuid4

import structlog

from browserkit.config.settings import get_settings

ROOT_LOGGER_NAME = "browserkit"

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")
test_id_var: ContextVar[str] = ContextVar("test_id", default="")

_configured = False
_config_lock = threading.RLock()
_file_handlers: List[logging.handlers.RotatingFileHandler] = []


def _bind_context_ids(logger, method_name, event_dict):
    for key, var in (("correlation_id", correlation_id_var), ("test_id", test_id_var)):
        value = var.get()
        if value:
            event_dict[key] = value
    return event_dict


def _stamp_time(logger, method_name, event_dict):
    event_dict["timestamp"] = datetime.now().isoformat()
    return event_dict


def _stamp_framework(logger, method_name, event_dict):
    event_dict.setdefault("framework", ROOT_LOGGER_NAME)
    return event_dict


def _processor_chain(json_format: bool, track_context: bool) -> List[Any]:
    chain: List[Any] = [_bind_context_ids] if track_context else []
    chain += [
        _stamp_time,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        _stamp_framework,
    ]
    if json_format:
        chain.append(structlog.processors.JSONRenderer(default=str))
    else:
        chain.append(structlog.dev.ConsoleRenderer(colors=False))
    return chain


def _reset_handlers(root: logging.Logger) -> None:
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    _file_handlers.clear()


def _add_file_handler(root: logging.Logger, path: Path, max_file_size_mb: int, backup_count: int) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=max_file_size_mb * 1024 * 1024,
        backupCount=backup_count,
        encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    _file_handlers.append(handler)


def setup_logging(
        log_level: str = "INFO",
        enable_console: bool = True,
        enable_file: bool = False,
        log_file_path: Optional[Path] = None,
        enable_json_format: bool = False,
        enable_correlation_id: bool = True,
        max_file_size_mb: int = 100,
        backup_count: int = 5
) -> None:
    """
    (Re)configure framework logging.

    Args:
        log_level: Minimum level name for the ``browserkit`` logger tree
        enable_console: Write events to stderr
        enable_file: Write events to a rotating file
        log_file_path: File target, ``logs/browserkit.log`` when omitted
        enable_json_format: One JSON object per line instead of console text
        enable_correlation_id: Stamp ``correlation_id``/``test_id`` onto events
        max_file_size_mb: Size at which the log file rotates
        backup_count: Rotated files to keep

    Example:
        >>> setup_logging("DEBUG", enable_file=True, enable_json_format=True)
    """
    global _configured

    with _config_lock:
        structlog.configure(
            processors=_processor_chain(enable_json_format, enable_correlation_id),
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.setLevel(getattr(logging, log_level.upper()))
        root.propagate = True
        _reset_handlers(root)

        if enable_console:
            console = logging.StreamHandler(sys.stderr)
            console.setFormatter(logging.Formatter("%(message)s"))
            root.addHandler(console)

        if enable_file:
            _add_file_handler(root, log_file_path or Path("logs/browserkit.log"), max_file_size_mb, backup_count)

        _configured = True

    get_logger("logging").debug(
        "Logging configured",
        log_level=log_level,
        console=enable_console,
        file=enable_file,
        json_format=enable_json_format
    )


def _setup_from_settings() -> None:
    options = get_settings().logging
    setup_logging(
        log_level=options.level,
        enable_console=options.console_enabled,
        enable_file=options.file_enabled,
        log_file_path=options.file_path,
        enable_json_format=options.json_format,
        enable_correlation_id=options.correlation_id_enabled,
        max_file_size_mb=options.max_file_size_mb,
        backup_count=options.backup_count
    )


def get_logger(name: str = "core") -> structlog.stdlib.BoundLogger:
    """
    Logger named ``browserkit.<name>``, configuring logging on first use.

    Example:
        >>> get_logger("session").info("Navigating", url="https://example.com")
    """
    if not _configured:
        with _config_lock:
            if not _configured:
                _setup_from_settings()
    return structlog.get_logger(f"{ROOT_LOGGER_NAME}.{name}")


def get_log_file_paths() -> List[Path]:
    return [Path(handler.baseFilename) for handler in _file_handlers]


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """Bind ``correlation_id`` (a fresh uuid4 when omitted) and return it."""
    correlation_id = correlation_id or str(uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


def set_test_id(test_id: str) -> None:
    test_id_var.set(test_id)


def clear_logging_context() -> None:
    correlation_id_var.set("")
    test_id_var.set("")


class LoggingContext:
    """
    Bind ids for the duration of a block and restore the outer ones on exit.

    A correlation id is generated when neither the block nor its caller
    supplied one.

    Example:
        >>> with LoggingContext(test_id="tests/test_login.py::test_ok"):
        ...     get_logger().info("Step")  # carries test_id
    """

    def __init__(self, correlation_id: Optional[str] = None, test_id: Optional[str] = None):
        self.correlation_id = correlation_id
        self.test_id = test_id
        self._outer = ("", "")

    def __enter__(self) -> "LoggingContext":
        self._outer = (correlation_id_var.get(), test_id_var.get())

        if self.correlation_id is not None or not self._outer[0]:
            set_correlation_id(self.correlation_id)
        if self.test_id is not None:
            set_test_id(self.test_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        correlation_id_var.set(self._outer[0])
        test_id_var.set(self._outer[1])


class PerformanceTimer:
    """
    Time a block and log its duration with any metrics collected inside it.

    Successful blocks log at debug level; a block that raises logs a warning
    naming the exception, which is then propagated.

    Example:
        >>> with PerformanceTimer("launch_chrome") as timer:
        ...     browser = launch()
        ...     timer.add_metric("channel", "chromium")
    """

    def __init__(self, operation_name: str, logger: Optional[structlog.stdlib.BoundLogger] = None):
        self.operation_name = operation_name
        self.logger = logger or get_logger("performance")
        self.metrics: Dict[str, Any] = {}
        self._started: Optional[float] = None
        self._finished: Optional[float] = None

    def add_metric(self, key: str, value: Any) -> None:
        self.metrics[key] = value

    @property
    def duration(self) -> Optional[float]:
        """Seconds elapsed so far, or in total once the block has exited."""
        if self._started is None:
            return None
        return (self._finished or time.perf_counter()) - self._started

    def __enter__(self) -> "PerformanceTimer":
        self._started = time.perf_counter()
        self.logger.debug("Timing started", operation=self.operation_name)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._finished = time.perf_counter()
        fields = dict(self.metrics, operation=self.operation_name, duration_seconds=round(self.duration, 3))

        if exc_type is None:
            self.logger.debug("Timing finished", **fields)
        else:
            self.logger.warning("Timed operation failed", exception_type=exc_type.__name__, error=str(exc_val), **fields)


def get_performance_timer(operation_name: str) -> PerformanceTimer:
    return PerformanceTimer(operation_name)
