"""
Celery Configuration

Configures Celery with Flask integration, Redis broker, and the opt-in
beat schedule for purging expired uploads.
"""

import os

from celery import Celery
from kombu import Queue

PURGE_TASK_NAME = "cloudshare.tasks.purge_expired_uploads"


def _cleanup_enabled() -> bool:
    return os.getenv("CLEANUP_ENABLED", "false").lower() == "true"


class CeleryConfig:
    """Celery configuration settings."""

    # Broker settings
    broker_url = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")
    result_backend = os.getenv("CELERY_RESULT_BACKEND", "redis://localhost:6379/0")

    # Task settings
    task_serializer = "json"
    accept_content = ["json"]
    result_serializer = "json"
    timezone = "UTC"
    enable_utc = True

    # Worker settings
    worker_prefetch_multiplier = 1
    task_acks_late = True

    # Task routing
    task_routes = {
        PURGE_TASK_NAME: {"queue": "cleanup_queue"},
    }

    # Queue definitions
    task_default_queue = "default"
    task_queues = (
        Queue("default", routing_key="default"),
        Queue("cleanup_queue", routing_key="cleanup"),
    )

    cleanup_interval_seconds = float(os.getenv("CLEANUP_INTERVAL_SECONDS", 300))

    # Expired uploads are only purged when explicitly enabled
    beat_schedule = (
        {
            "purge-expired-uploads": {
                "task": PURGE_TASK_NAME,
                "schedule": cleanup_interval_seconds,
            },
        }
        if _cleanup_enabled()
        else {}
    )

    # Result backend settings
    result_expires = 3600  # 1 hour


def make_celery(app):
    """
    Create Celery instance with Flask app context.

    Args:
        app: Flask application instance

    Returns:
        Configured Celery instance
    """
    celery = Celery(
        app.import_name,
        backend=CeleryConfig.result_backend,
        broker=CeleryConfig.broker_url,
    )

    # Update Celery config from our config class
    celery.config_from_object(CeleryConfig)

    # Ensure tasks run within Flask app context
    class ContextTask(celery.Task):
        """Make celery tasks work with Flask app context."""

        def __call__(self, *args, **kwargs):
            with app.app_context():
                return self.run(*args, **kwargs)

    celery.Task = ContextTask
    return celery
