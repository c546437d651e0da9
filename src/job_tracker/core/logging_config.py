# job-tracker-backend\src\job_tracker\core\logging_config.py

import logging

from job_tracker.core.config import settings

_LOG_CONFIGURED = False


def configure_logging() -> None:
    """Configures root logging once, using LOG_LEVEL from settings."""
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    _LOG_CONFIGURED = True
