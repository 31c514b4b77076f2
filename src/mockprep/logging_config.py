from __future__ import annotations

import logging

from mockprep.config import get_settings

# Chatty at INFO; only raised to the app level when debugging.
NOISY_LOGGERS = ("multipart", "sqlalchemy.engine", "uvicorn.access")

_LOG_CONFIGURED = False


def configure_logging(level: str | None = None) -> None:
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    settings = get_settings()
    resolved = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    if resolved > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured env=%s level=%s", settings.app_env, resolved)
    _LOG_CONFIGURED = True
