"""Logger manager with structured logging, per-operation context, and counters.

Handlers and guards log through a ``LoggerManager`` so the host adapter can
decide where records go (colored console, rotating file, or JSON lines) and
read back the guard counters after a logical operation finishes.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
import datetime
from enum import Enum
import json
import logging
from logging import (
    Handler,
    Logger,
    LogRecord,
    getLevelName,
    getLogRecordFactory,
    setLogRecordFactory,
)
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys
import threading
from typing import Any, ClassVar, cast

import colorlog

from trigger_guard.constants import LOGGER_NAME


class MetricType(Enum):
    """Enum for supported metric types."""

    COUNTER = "counter"
    GAUGE = "gauge"


@dataclass
class LoggerConfig:
    """Configuration for LoggerManager."""

    log_dir: Path = Path("logs")
    log_level: str = "INFO"
    log_file_name: str = "trigger_guard.log"
    log_to_file: bool = False
    max_file_size_mb: int = 10
    backup_count: int = 3
    structured_logging: bool = False
    telemetry_enabled: bool = False
    log_filters: dict[str, Callable[[LogRecord], bool]] | None = None
    log_colors: dict[str, str] | None = None

    DEFAULT_LOG_COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "red,bg_white",
    }

    def __post_init__(self) -> None:
        self.log_dir = Path(self.log_dir).resolve()
        self.log_level = self.log_level.upper()
        if self.log_to_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_colors = self.log_colors or self.DEFAULT_LOG_COLORS


class CustomLogRecord(LogRecord):
    """LogRecord carrying context and metrics attributes."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._custom_context: dict[str, Any] = {}
        self._custom_metrics: dict[str, Any] = {}

    @property
    def custom_context(self) -> dict[str, Any]:
        return self._custom_context

    @property
    def custom_metrics(self) -> dict[str, Any]:
        return self._custom_metrics


def _to_custom_record(record: LogRecord) -> CustomLogRecord:
    custom = CustomLogRecord(
        record.name,
        record.levelno,
        record.pathname,
        record.lineno,
        record.msg,
        record.args,
        record.exc_info,
        record.funcName,
        record.stack_info,
    )
    # Keep attributes added by previously installed record factories.
    for key, value in record.__dict__.items():
        custom.__dict__.setdefault(key, value)
    return custom


class StructuredFormatter(logging.Formatter):
    """JSON-lines formatter exposing record context and metrics."""

    def format(self, record: LogRecord) -> str:
        custom_record = cast(CustomLogRecord, record)
        log_data = {
            "timestamp": datetime.datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
            "context": getattr(
                record, "context", getattr(custom_record, "custom_context", {})
            ),
            "metrics": getattr(
                record, "metrics", getattr(custom_record, "custom_metrics", {})
            ),
        }
        return json.dumps(log_data, ensure_ascii=False, default=str)


def _metric_key(metric_name: str, tags: Mapping[str, str]) -> str:
    if not tags:
        return metric_name
    labels = ",".join(f"{k}={v}" for k, v in sorted(tags.items()))
    return f"{metric_name}{{{labels}}}"


class LoggerSettings:
    """Builds logging handlers from a LoggerConfig."""

    def __init__(self, config: LoggerConfig) -> None:
        self.config = config
        self._file_handler: RotatingFileHandler | None = None

    def get_handlers(self) -> tuple[Handler, Handler | None]:
        """Return the console handler and, when enabled, the file handler."""
        console_handler = self._get_console_handler()
        file_handler = self._get_file_handler() if self.config.log_to_file else None
        return console_handler, file_handler

    def _apply_filters(self, handler: Handler) -> None:
        if self.config.log_filters:
            for filter_fn in self.config.log_filters.values():
                handler.addFilter(filter_fn)

    def _get_console_handler(self) -> Handler:
        handler = colorlog.StreamHandler()
        formatter: logging.Formatter = (
            colorlog.ColoredFormatter(
                "%(log_color)s%(asctime)s - [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
                log_colors=self.config.log_colors,
            )
            if not self.config.structured_logging
            else StructuredFormatter()
        )
        handler.setFormatter(formatter)
        self._apply_filters(handler)
        return handler

    def _get_file_handler(self) -> RotatingFileHandler | None:
        file_path = self.config.log_dir / self.config.log_file_name
        try:
            handler = RotatingFileHandler(
                file_path,
                maxBytes=self.config.max_file_size_mb * 1024 * 1024,
                backupCount=self.config.backup_count,
            )
        except OSError as e:
            print(f"Failed to create RotatingFileHandler: {e}", file=sys.stderr)
            return None
        formatter = (
            StructuredFormatter()
            if self.config.structured_logging
            else logging.Formatter(
                "%(asctime)s - [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handler.setFormatter(formatter)
        self._apply_filters(handler)
        self._file_handler = handler
        return handler


class CustomLogger:
    """Logger wrapper exposing the manager's context helper."""

    def __init__(self, logger: Logger, manager: LoggerManager) -> None:
        self.logger = logger
        self.manager = manager

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logger.info(msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logger.error(msg, *args, **kwargs)

    @contextmanager
    def context(self, **context_kwargs: Any) -> Iterator[CustomLogger]:
        """Delegate to LoggerManager's context method."""
        with self.manager.context(**context_kwargs):
            yield self


class LoggerManager:
    """Owns one configured logger plus the counters recorded through it."""

    def __init__(
        self,
        name: str | LoggerConfig = LOGGER_NAME,
        config: LoggerConfig | None = None,
    ) -> None:
        if isinstance(name, LoggerConfig):
            config = name
            name = LOGGER_NAME
        self.name = name
        self.config = config or LoggerConfig()
        self.settings = LoggerSettings(self.config)
        self._telemetry_metrics: dict[str, dict[str, Any]] = defaultdict(
            lambda: {"type": MetricType.COUNTER.value, "value": 0}
        )
        self._metrics_lock = threading.Lock()
        self._handlers: list[Handler] = []
        self._logger = self._configure_logger()

    def get_logger(self) -> CustomLogger:
        """Return the configured custom logger."""
        return CustomLogger(self._logger, self)

    @property
    def handlers(self) -> tuple[Handler, ...]:
        """Handlers built from this manager's configuration."""
        return tuple(self._handlers)

    def _configure_logger(self) -> Logger:
        logger = logging.getLogger(self.name)
        if getattr(logger, "_is_configured", False):
            self._handlers = list(getattr(logger, "_managed_handlers", []))
            return logger

        logger.setLevel(getLevelName(self.config.log_level))
        console_handler, file_handler = self.settings.get_handlers()
        self._handlers = [console_handler]
        if file_handler:
            self._handlers.append(file_handler)
        for handler in self._handlers:
            logger.addHandler(handler)
        # Only these handlers are filtered, flushed or closed by a manager.
        logger._managed_handlers = list(self._handlers)  # type: ignore[attr-defined]

        logger.propagate = False
        logger._is_configured = True  # type: ignore[attr-defined]
        return logger

    @contextmanager
    def context(self, **context_kwargs: Any) -> Iterator[Logger]:
        """Attach ``context_kwargs`` to every record emitted inside the block."""
        current_factory = getLogRecordFactory()

        def context_log_record_factory(
            *factory_args: Any,
            **factory_kwargs: Any,
        ) -> CustomLogRecord:
            record = _to_custom_record(current_factory(*factory_args, **factory_kwargs))
            record._custom_context = dict(context_kwargs)
            return record

        setLogRecordFactory(context_log_record_factory)
        try:
            yield self._logger
        finally:
            setLogRecordFactory(current_factory)

    def log_metric(
        self,
        metric_name: str,
        value: int | float = 1,
        metric_type: MetricType = MetricType.COUNTER,
        tags: Mapping[str, str] | None = None,
    ) -> None:
        """Record a counter increment or gauge value when telemetry is enabled."""
        if not self.config.telemetry_enabled:
            return

        tags_dict: dict[str, str] = dict(tags or {})
        key = _metric_key(metric_name, tags_dict)
        with self._metrics_lock:
            metric = self._telemetry_metrics[key]
            metric["type"] = metric_type.value
            metric["tags"] = tags_dict
            if metric_type == MetricType.COUNTER:
                metric["value"] += value
            else:
                metric["value"] = value

        self._logger.debug(
            f"Metric recorded: {key} = {value}",
            extra={
                "metrics": {metric_name: {"value": value, "type": metric_type.value}},
            },
        )

    def get_metrics(self) -> dict[str, dict[str, Any]]:
        """Return collected telemetry metrics keyed by name and tags."""
        with self._metrics_lock:
            return {
                name: dict(metric) for name, metric in self._telemetry_metrics.items()
            }

    def metric_value(self, metric_name: str, **tags: str) -> int | float:
        """Return the current value of one metric, or 0 when never recorded."""
        key = _metric_key(metric_name, tags)
        with self._metrics_lock:
            metric = self._telemetry_metrics.get(key)
            return metric["value"] if metric else 0

    def reset_metrics(self) -> None:
        with self._metrics_lock:
            self._telemetry_metrics.clear()
        self._logger.debug("Telemetry metrics reset", extra={"stage": "metrics_reset"})

    def add_filter(self, name: str, filter_fn: Callable[[LogRecord], bool]) -> None:
        if self.config.log_filters is None:
            self.config.log_filters = {}
        self.config.log_filters[name] = filter_fn
        for handler in self._handlers:
            handler.addFilter(filter_fn)
        self._logger.info(f"Added log filter: {name}", extra={"filter_name": name})

    def flush(self) -> None:
        for handler in self._handlers:
            handler.flush()

    def close(self) -> None:
        """Detach and close the handlers this manager built."""
        for handler in self._handlers:
            handler.close()
            self._logger.removeHandler(handler)
        self._handlers = []
        self._logger._managed_handlers = []  # type: ignore[attr-defined]
        self._logger._is_configured = False  # type: ignore[attr-defined]
