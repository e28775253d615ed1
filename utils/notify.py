"""User-facing outcome messages for the current request.

Delivery (toasts, SMS, email) belongs to the client; this only records
what should be shown and logs it.
"""
import logging

from flask import g, has_app_context

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"
WARNING = "warning"

_LEVELS = {SUCCESS: logging.INFO, WARNING: logging.WARNING, ERROR: logging.WARNING}


def notify(kind: str, message: str) -> str:
    logger.log(_LEVELS.get(kind, logging.INFO), "[%s] %s", kind, message)
    if has_app_context():
        g.setdefault("notifications", []).append({"kind": kind, "message": message})
    return message


def success(message: str) -> str:
    return notify(SUCCESS, message)


def warning(message: str) -> str:
    return notify(WARNING, message)


def failure(message: str) -> str:
    return notify(ERROR, message)

