"""
Logging setup for the job board client.

Modules log through logging.getLogger(__name__). setup_logging() installs
one stdout handler on the root logger; every record is tagged with the
browser request it was emitted under ("-" outside a request), so the API
calls made for one page can be read together.
"""

import json
import logging
import sys

from flask import has_request_context, request


DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(http_request)s): %(message)s"

# Third-party loggers held at WARNING unless the app itself runs at a higher level
QUIET_LOGGERS = ("urllib3",)


class RequestContextFilter(logging.Filter):
    """Adds `http_request` ("GET /dashboard") to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if has_request_context():
            record.http_request = f"{request.method} {request.path}"
        else:
            record.http_request = "-"
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "name": record.name,
            "request": getattr(record, "http_request", "-"),
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def build_formatter(format: str) -> logging.Formatter:
    if format == "json":
        return JsonFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(level: str = "INFO", format: str = "simple") -> logging.Handler:
    """
    Install the stdout handler, replacing any earlier one.

    Args:
        level: DEBUG, INFO, WARNING or ERROR (unknown names mean INFO)
        format: "simple" text lines or "json"

    Returns:
        The installed handler
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    # create_app may run more than once per process (reloader, tests)
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(build_formatter(format))
    root.addHandler(handler)
    root.setLevel(log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
    return handler
