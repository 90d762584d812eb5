"""Logging setup shared by the CLI and the API server.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed here, once, by the process entry point.
"""

import logging

from pythonjsonlogger.json import JsonFormatter

_JSON_FIELDS = ["asctime", "levelname", "name", "message", "module", "funcName", "lineno"]
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _build_json_formatter() -> logging.Formatter:
    fmt = " ".join(f"%({f})s" for f in _JSON_FIELDS)
    return JsonFormatter(fmt=fmt)


def configure_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """
    Install a single stream handler on the root logger.

    Args:
        level: Level name such as "DEBUG" or "INFO"; unknown names fall back to INFO
        fmt: "json" for structured output, anything else for plain text

    Returns:
        The installed handler
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    root = logging.getLogger()
    root.setLevel(log_level)
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler()
    if str(fmt).lower() == "json":
        handler.setFormatter(_build_json_formatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=_TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
    root.addHandler(handler)

    # Keep uvicorn output on the same handler and level
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"):
        server_logger = logging.getLogger(name)
        server_logger.handlers = [handler]
        server_logger.setLevel(log_level)
        server_logger.propagate = False

    return handler


def configure_from_settings(settings=None) -> logging.Handler:
    """Configure logging from ``LoggingSettings``."""
    if settings is None:
        from .config import get_settings
        settings = get_settings()
    return configure_logging(settings.logging.level, settings.logging.format)
