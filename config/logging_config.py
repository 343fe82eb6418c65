"""Logging setup shared by the API process."""

import logging
from typing import Optional

from config.variable import LOG_LEVEL

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("craftcode")


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    resolved = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=resolved, format=LOG_FORMAT)
    root.setLevel(resolved)
    # Motor/pymongo are chatty at DEBUG
    logging.getLogger("pymongo").setLevel(max(resolved, logging.INFO))


def log_request_error(request, exc: Exception, message: Optional[str] = None) -> None:
    """
    Log an exception together with the request that triggered it.

    Args:
        request: Starlette request (anything with .method and .url)
        exc: The exception being reported
        message: Optional custom message
    """
    context = {}
    if request is not None:
        context["method"] = getattr(request, "method", "?")
        url = getattr(request, "url", None)
        context["path"] = getattr(url, "path", str(url)) if url is not None else "?"

    parts = [message or f"Unhandled exception: {type(exc).__name__}"]
    if context:
        parts.append("Context: " + ", ".join(f"{k}={v}" for k, v in context.items()))
    logger.error(" | ".join(parts), exc_info=exc)
