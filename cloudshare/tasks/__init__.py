"""
Celery Tasks

Task modules are registered by name in ``celery_app`` and imported by the
worker at startup.
"""
