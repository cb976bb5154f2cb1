# backend/app/logging_config.py
import logging
import uuid
from contextvars import ContextVar
from typing import Any, Dict

# Set per request by the middleware in main.py
request_id_var: ContextVar[str] = ContextVar("request_id", default="no-request-id")


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


class RequestIdFilter(logging.Filter):
    def filter(self, record):
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        return True


APP_LOGGERS = ("app", "academic_core")


def build_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """dictConfig for uvicorn and the application loggers."""
    package_logger = {
        "handlers": ["default", "error"],
        "level": level.upper(),
        "propagate": False,
    }
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_id_filter": {
                "()": RequestIdFilter,
            },
        },
        "formatters": {
            "default": {
                "()": "uvicorn.logging.DefaultFormatter",
                "fmt": "%(levelprefix)s %(asctime)s [%(name)s] [%(request_id)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "access": {
                "()": "uvicorn.logging.AccessFormatter",
                "fmt": '%(levelprefix)s %(asctime)s [%(name)s] [%(request_id)s] %(client_addr)s - "%(request_line)s" %(status_code)s',
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            # tracebacks for the error handler
            "detailed": {
                "format": "%(levelname)s %(asctime)s [%(name)s] [%(module)s:%(lineno)d] - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "filters": ["request_id_filter"],
            },
            "access": {
                "formatter": "access",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "filters": ["request_id_filter"],
            },
            "error": {
                "formatter": "detailed",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "level": "ERROR",
                "filters": ["request_id_filter"],
            },
        },
        "loggers": {
            "": {
                "handlers": ["default", "error"],
                "level": "INFO",
            },
            "uvicorn.access": {
                "handlers": ["access"],
                "level": "INFO",
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "level": "WARNING",
            },
        },
    }
    for name in APP_LOGGERS:
        config["loggers"][name] = dict(package_logger)
    return config
