"""Logging setup handed to uvicorn.

Extends uvicorn's default dictConfig so that ``relay_service.*`` loggers share
its handlers and every record carries the current ``X-Request-ID``.
"""
from __future__ import annotations

import copy
import logging
from typing import Any

from uvicorn.config import LOGGING_CONFIG

from relay_service.api.middleware.correlation_id import correlation_id_ctx


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_ctx.get() or "-"
        return True


def build_log_config(level: str = "info") -> dict[str, Any]:
    config = copy.deepcopy(LOGGING_CONFIG)
    config["filters"] = {
        "correlation_id": {"()": "relay_service.logging_config.CorrelationIdFilter"},
    }
    config["formatters"]["app"] = {
        "format": "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    }
    config["handlers"]["app"] = {
        "class": "logging.StreamHandler",
        "formatter": "app",
        "filters": ["correlation_id"],
        "stream": "ext://sys.stderr",
    }
    config["loggers"]["relay_service"] = {
        "handlers": ["app"],
        "level": level.upper(),
        "propagate": False,
    }
    return config
