"""Entrypoint: python -m relay_service"""
from __future__ import annotations

import uvicorn

from relay_service.config import settings
from relay_service.logging_config import build_log_config


def main() -> None:
    uvicorn.run(
        "relay_service.app:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL,
        log_config=build_log_config(settings.LOG_LEVEL),
    )


if __name__ == "__main__":
    main()
