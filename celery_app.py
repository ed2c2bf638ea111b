"""
Celery Application Instance

Creates the Celery app instance for use by workers and beat scheduler.
Uses the app factory so the task sees the same services as the web process.
"""

from app_factory import create_app
from cloudshare.config.logging_config import setup_logging

setup_logging()

flask_app = create_app()

celery_app = flask_app.celery
if celery_app is None:
    raise RuntimeError(
        "Celery is not available: set CELERY_ENABLED=true and check the broker "
        "settings (see the startup log for the initialization error)"
    )

# Task modules are imported by the worker at startup, after celery_app exists
celery_app.conf.imports = (
    "cloudshare.tasks.cleanup_task",
)
