"""Configuration modules for Redis, GCS, Celery and logging."""
