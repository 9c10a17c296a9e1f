"""
Portfolio API - Centralized Logging Configuration

Every line carries the request id and, once a token has been verified, the
acting user id. Development gets a readable single-line format; production
writes JSON lines for log aggregation.
"""

import logging
import sys
import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, Optional
from contextvars import ContextVar

from portfolio.core.config import settings


request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

# Attributes every LogRecord has; anything else came in through ``extra``
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', None, None))) | {
    'message', 'asctime', 'request_id', 'user_id',
}

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
SLOW_REQUEST_MS = 1000


def get_request_id() -> str:
    return request_id_var.get()


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def get_user_id() -> str:
    return user_id_var.get()


def set_user_id(user_id: str) -> None:
    user_id_var.set(user_id)


def generate_request_id() -> str:
    """Short random id used when the client did not send X-Request-ID"""
    return uuid.uuid4().hex[:8]


def clear_context() -> None:
    request_id_var.set('')
    user_id_var.set('')


class JSONFormatter(logging.Formatter):
    """One JSON object per record"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
            "request_id": get_request_id() or None,
            "user_id": get_user_id() or None,
        }
        payload.update(
            (key, value) for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith('_')
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ContextualFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record.request_id = get_request_id() or '-'
        record.user_id = get_user_id() or '-'
        return super().format(record)


class PortfolioLogger(logging.Logger):
    """
    Logger with one helper per event the API emits.

    Each helper sets ``event_type`` so JSON output can be filtered without
    parsing the message text.
    """

    def log_request(self, method: str, path: str, status_code: int,
                    duration_ms: float, **kwargs) -> None:
        """Completed HTTP request; 4xx logs as warning, 5xx as error"""
        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        slow = duration_ms > SLOW_REQUEST_MS
        self.log(
            logging.WARNING if slow and level == logging.INFO else level,
            f"{method} {path} -> {status_code} in {duration_ms:.1f}ms" + (" (slow)" if slow else ""),
            extra={
                "event_type": "http_request",
                "http_method": method,
                "http_path": path,
                "http_status": status_code,
                "duration_ms": round(duration_ms, 2),
                "slow": slow,
                **kwargs
            }
        )

    def log_statement(self, operation: str, table: str, rows: int, **kwargs) -> None:
        """Repository reads and writes, at debug level"""
        self.debug(
            f"{operation} {table}: {rows} row(s)",
            extra={"event_type": "db", "db_operation": operation, "db_table": table,
                   "db_rows": rows, **kwargs}
        )

    def log_auth_event(self, event: str, success: bool, email: Optional[str] = None,
                       reason: Optional[str] = None, **kwargs) -> None:
        """Registration, login and token verification outcomes"""
        outcome = "ok" if success else f"rejected ({reason or 'unknown'})"
        self.log(
            logging.INFO if success else logging.WARNING,
            f"auth {event} {outcome}" + (f" for {email}" if email else ""),
            extra={"event_type": "auth", "auth_event": event, "auth_success": success,
                   "auth_email": email, "auth_reason": reason, **kwargs}
        )

    def log_access_denied(self, actor_id: str, resource: str, operation: str,
                          owner_id: Optional[str]) -> None:
        self.warning(
            f"denied {operation} on {resource} for {actor_id}",
            extra={"event_type": "access_denied", "resource": resource,
                   "operation": operation, "owner_id": owner_id}
        )

    def log_unhandled(self, error: Exception, method: str, path: str) -> None:
        self.error(
            f"unhandled {type(error).__name__} on {method} {path}: {error}",
            exc_info=error,
            extra={"event_type": "unhandled_error", "http_method": method, "http_path": path}
        )


def _build_handlers() -> List[logging.Handler]:
    if settings.is_production:
        console_format: logging.Formatter = JSONFormatter()
        file_format: logging.Formatter = console_format
    else:
        console_format = ContextualFormatter("%(levelname)-8s [%(request_id)s] %(message)s")
        file_format = ContextualFormatter(
            "%(asctime)s %(levelname)-8s [%(request_id)s] [%(user_id)s] "
            "%(module)s:%(lineno)d %(message)s"
        )

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.INFO)
    console.setFormatter(console_format)
    handlers: List[logging.Handler] = [console]

    if settings.LOG_FILE:
        path = Path(settings.LOG_FILE)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            path,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=10 if settings.is_production else 3,
        )
        rotating.setLevel(logging.DEBUG)
        rotating.setFormatter(file_format)
        handlers.append(rotating)
    return handlers


def setup_logging() -> PortfolioLogger:
    """Configure the ``portfolio`` logger tree; safe to call more than once"""
    logging.setLoggerClass(PortfolioLogger)
    root = logging.getLogger("portfolio")
    root.__class__ = PortfolioLogger
    root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    root.propagate = False
    root.handlers.clear()
    for handler in _build_handlers():
        root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return root


logger: PortfolioLogger = setup_logging()


__all__ = [
    'logger',
    'setup_logging',
    'get_request_id',
    'set_request_id',
    'get_user_id',
    'set_user_id',
    'generate_request_id',
    'clear_context',
    'PortfolioLogger',
    'SLOW_REQUEST_MS',
]
