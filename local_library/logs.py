"""Logging helpers: one stream handler and a per-request id on every record."""

import logging
import uuid
from contextvars import ContextVar

_request_id: ContextVar[str] = ContextVar("request_id", default="-")

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(request_id)s | %(name)s | %(message)s"


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get()
        return True


def configure_logging(level="INFO") -> logging.Logger:
    logger = logging.getLogger("local_library")
    logger.setLevel(level)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"local_library.{name}")


def bind_request_id(value: str | None = None) -> str:
    token = value or uuid.uuid4().hex[:12]
    _request_id.set(token)
    return token


def current_request_id() -> str:
    return _request_id.get()


def clear_request_id() -> None:
    _request_id.set("-")
