"""
Logging Configuration

Configures the root logger once at process startup.
"""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - [%(levelname)s] - %(message)s"


def setup_logging(level: str = None) -> None:
    """
    Configure root logging for the web process and Celery workers.

    Args:
        level: Log level name, defaults to LOG_LEVEL or INFO
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stdout,
    )

    # Quiet chatty client libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
