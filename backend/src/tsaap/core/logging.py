"""
Logging setup for the Tsaap notes backend.

Console output is JSON in deployed environments and coloured text with
``debug`` on. ``tsaap.*`` loggers also write to rotating files under
``settings.log_dir``; errors get a JSON file of their own.
"""
import json
import logging
import logging.config
import sys
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import Settings, get_settings

# attributes every LogRecord has; anything else came in through extra=
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}

_LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[35m",
}
_RESET = "\033[0m"
_DIM = "\033[90m"


class JSONFormatter(logging.Formatter):
    """One JSON object per line; extra= fields go under "extra"."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }
        extra = {k: v for k, v in vars(record).items() if k not in _STANDARD_ATTRS}
        if extra:
            entry["extra"] = extra
        return json.dumps(entry, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Human readable console lines with the level coloured."""

    def format(self, record: logging.LogRecord) -> str:
        # format a copy so other handlers see the plain record
        copy = logging.makeLogRecord(vars(record))
        color = _LEVEL_COLORS.get(record.levelno, "")
        copy.levelname = f"{color}{record.levelname:<8}{_RESET}"
        copy.name = f"{_DIM}{record.name}{_RESET}"
        return super().format(copy)


def get_log_level(level_name: Optional[str] = None) -> int:
    """Numeric level for a name, INFO when unknown."""
    name = (level_name or get_settings().log_level).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _rotating(path: Path, formatter: str, level: str) -> Dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "filename": str(path),
        "maxBytes": 10 * 1024 * 1024,
        "backupCount": 5,
        "encoding": "utf-8",
        "formatter": formatter,
        "level": level,
    }


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    """dictConfig for the given settings."""
    log_dir = Path(settings.log_dir)
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": JSONFormatter},
            "colored": {
                "()": ColoredFormatter,
                "format": "%(asctime)s %(levelname)s %(name)s | %(message)s",
                "datefmt": "%H:%M:%S",
            },
            "plain": {
                "format": "%(asctime)s %(levelname)-8s %(name)s %(funcName)s:%(lineno)d | %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "colored" if settings.debug else "json",
                "level": get_log_level(settings.log_level),
            },
            "app_file": _rotating(log_dir / "tsaap.log", "plain", "DEBUG"),
            "error_file": _rotating(log_dir / "error.log", "json", "ERROR"),
        },
        "loggers": {
            "tsaap": {
                "handlers": ["console", "app_file", "error_file"],
                "level": "DEBUG",
                "propagate": False,
            },
            "uvicorn": {"handlers": ["console"], "level": "INFO", "propagate": False},
            "uvicorn.access": {"handlers": ["console"], "level": "WARNING", "propagate": False},
            "sqlalchemy.engine": {
                "handlers": ["app_file"],
                "level": "INFO" if settings.database_echo else "WARNING",
                "propagate": False,
            },
            "alembic": {"handlers": ["console"], "level": "INFO", "propagate": False},
        },
        "root": {"handlers": ["console", "app_file"], "level": "INFO"},
    }


def setup_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    Path(settings.log_dir).mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(settings))
    get_logger("logging").info(
        "Logging configured",
        extra={"log_level": settings.log_level, "environment": settings.environment},
    )


def get_logger(name: str) -> logging.Logger:
    """Logger in the ``tsaap`` hierarchy."""
    return logging.getLogger(f"tsaap.{name}")


class LoggingMiddleware:
    """ASGI middleware logging each HTTP request with its status and duration."""

    def __init__(self, app, logger_name: str = "http"):
        self.app = app
        self.logger = get_logger(logger_name)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = uuid.uuid4().hex[:12]
        request = {
            "request_id": request_id,
            "method": scope["method"],
            "path": scope["path"],
        }
        started = time.perf_counter()
        self.logger.debug("HTTP request", extra={
            **request,
            "query_string": scope.get("query_string", b"").decode("latin-1"),
            "client_ip": scope["client"][0] if scope.get("client") else None,
        })

        def elapsed_ms() -> float:
            return round((time.perf_counter() - started) * 1000, 2)

        async def send_with_logging(message):
            if message["type"] == "http.response.start":
                self.logger.info("HTTP response", extra={
                    **request,
                    "status_code": message["status"],
                    "duration_ms": elapsed_ms(),
                })
            await send(message)

        try:
            await self.app(scope, receive, send_with_logging)
        except Exception as exc:
            self.logger.error("HTTP request failed", extra={
                **request,
                "duration_ms": elapsed_ms(),
                "exception_type": type(exc).__name__,
            }, exc_info=exc)
            raise
