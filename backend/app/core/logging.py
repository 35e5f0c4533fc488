"""
Console logging for the relay.

Every module gets its logger through ``get_logger(__name__)``. The returned
adapter accepts free-form keyword arguments and carries them on the record as
structured fields, so call sites read like::

    logger.info("Loaded project context", records=3, fallback=False)

Records below WARNING go to stdout, WARNING and above to stderr. Each line
carries a timestamp, the level name, the call site and the rendered fields.
"""

import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, TextIO

from app.core.config import Settings

ROOT_LOGGER_NAME = "app"

SUCCESS = 25
NONE = logging.CRITICAL + 10

logging.addLevelName(SUCCESS, "SUCCESS")
logging.addLevelName(NONE, "NONE")

_LOGGING_KWARGS = {"exc_info", "stack_info", "stacklevel", "extra"}

_LEVEL_LABELS = {logging.WARNING: "WARN"}

_RESET = "\x1b[0m"
_LEVEL_COLORS = {
    logging.DEBUG: "\x1b[90m",
    logging.INFO: "\x1b[34m",
    SUCCESS: "\x1b[32m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
    logging.CRITICAL: "\x1b[31m",
}


def _short_location(pathname: str, lineno: int) -> str:
    parts = pathname.replace("\\", "/").split("/")
    return f"{'/'.join(parts[-2:])}:{lineno}"


def _render_value(value: Any) -> str:
    if value is None or isinstance(value, str | int | float | bool):
        return str(value)
    try:
        return json.dumps(value, indent=2, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


class ConsoleFormatter(logging.Formatter):
    """Formats records as ``DD/MM/YYYY HH:MM:SS [LEVEL] (dir/file.py:line) - message k=v``."""

    default_time_format = "%d/%m/%Y %H:%M:%S"

    def __init__(self, use_color: bool = False):
        super().__init__()
        self.use_color = use_color

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        created = datetime.fromtimestamp(record.created)
        return created.strftime(datefmt or self.default_time_format)

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record)
        location = getattr(record, "location", None) or _short_location(
            record.pathname, record.lineno
        )
        label = _LEVEL_LABELS.get(record.levelno, record.levelname)
        header = f"{timestamp} [{label}] ({location})"
        if self.use_color:
            color = _LEVEL_COLORS.get(record.levelno, "")
            header = f"{color}{header}{_RESET}"

        parts = [record.getMessage()]
        fields = getattr(record, "fields", None) or {}
        parts.extend(f"{key}={_render_value(value)}" for key, value in fields.items())
        line = f"{header} - {' '.join(parts)}"

        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class _BelowLevelFilter(logging.Filter):
    def __init__(self, ceiling: int):
        super().__init__()
        self.ceiling = ceiling

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.ceiling


class StructuredLogger(logging.LoggerAdapter):
    """Logger adapter that turns extra keyword arguments into record fields.

    ``location`` is reserved: when given it replaces the call site that
    logging resolves from the stack.
    """

    def __init__(self, logger: logging.Logger):
        super().__init__(logger, {})

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        passthrough = {k: v for k, v in kwargs.items() if k in _LOGGING_KWARGS}
        fields = {k: v for k, v in kwargs.items() if k not in _LOGGING_KWARGS}
        location = fields.pop("location", None)

        extra = dict(passthrough.pop("extra", None) or {})
        extra["fields"] = fields
        if location:
            extra["location"] = location
        passthrough["extra"] = extra
        return msg, passthrough

    warn = logging.LoggerAdapter.warning

    def success(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        # Skip this frame so the record points at our caller.
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 1
        self.log(SUCCESS, msg, *args, **kwargs)


def get_logger(name: str) -> StructuredLogger:
    return StructuredLogger(logging.getLogger(name))


def resolve_level(level: int | str | None, environment: str = "development") -> int:
    """Map a level name or number to a logging level, defaulting by environment."""
    if level is None or level == "":
        return logging.INFO if environment == "production" else logging.DEBUG
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name == "WARN":
        name = "WARNING"
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def set_log_level(level: int | str) -> None:
    """Change the minimum level for the whole ``app`` logger tree at runtime."""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(resolve_level(level))


def get_log_level() -> int:
    return logging.getLogger(ROOT_LOGGER_NAME).level


def _wants_color(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def setup_logging(
    settings: Settings,
    *,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> logging.Logger:
    """Install the console handlers on the ``app`` logger. Safe to call repeatedly."""
    out = stdout or sys.stdout
    err = stderr or sys.stderr

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if getattr(handler, "_relay_console", False):
            root.removeHandler(handler)

    out_handler = logging.StreamHandler(out)
    out_handler.addFilter(_BelowLevelFilter(logging.WARNING))
    out_handler.setFormatter(ConsoleFormatter(use_color=_wants_color(out)))

    err_handler = logging.StreamHandler(err)
    err_handler.setLevel(logging.WARNING)
    err_handler.setFormatter(ConsoleFormatter(use_color=_wants_color(err)))

    for handler in (out_handler, err_handler):
        handler._relay_console = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    root.setLevel(resolve_level(settings.LOG_LEVEL, settings.ENVIRONMENT))
    root.propagate = False
    return root
