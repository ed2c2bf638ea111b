"""
Application Factory

Creates and configures the Flask application with all dependencies.
Store clients are built here and handed to the services explicitly, so
tests can pass in their own container or stores.
"""

import logging
import os
from typing import Callable, Optional

from flask import Flask
from flask_cors import CORS

from cloudshare.application.dependency_container import DependencyContainer
from cloudshare.application.event_publisher import EventPublisher
from cloudshare.application.share_service import ShareService
from cloudshare.config.celery_config import make_celery
from cloudshare.config.redis_config import (
    RedisConfig,
    create_redis_manager,
    create_redis_repository,
)
from cloudshare.domain.file_sharing.entities import utc_now
from cloudshare.domain.file_sharing.repositories import IContentStore, IMetadataTracker
from cloudshare.domain.file_sharing.validator import UploadValidator
from cloudshare.infrastructure.redis_metadata_tracker import RedisMetadataTracker
from cloudshare.infrastructure.redis_repository import RedisConnectionManager
from cloudshare.infrastructure.storage_factory import StorageFactory

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class AppConfig:
    """Application configuration."""

    def __init__(self):
        self.flask_env = os.getenv("FLASK_ENV", "development")
        self.is_production = self.flask_env == "production"

        # Backend error text is shown to users outside production unless disabled
        self.expose_error_details = _env_flag("EXPOSE_ERROR_DETAILS", not self.is_production)

        self.max_content_length_mb = int(os.getenv("MAX_CONTENT_LENGTH_MB", 32))
        self.recent_uploads_count = int(os.getenv("RECENT_UPLOADS_COUNT", 10))
        self.storage_backend = os.getenv("STORAGE_BACKEND")
        self.celery_enabled = _env_flag("CELERY_ENABLED", True)


def build_container(
    config: AppConfig,
    content_store: Optional[IContentStore] = None,
    metadata_tracker: Optional[IMetadataTracker] = None,
    clock: Callable = utc_now,
) -> DependencyContainer:
    """
    Build the dependency container.

    Registers every store adapter, domain service and application service
    as a singleton. Stores that are not passed in are built from the
    environment.

    Args:
        config: Application configuration
        content_store: Content store to use instead of the configured one
        metadata_tracker: Metadata tracker to use instead of Redis
        clock: Time source for the share service

    Returns:
        Populated DependencyContainer
    """
    container = DependencyContainer()

    if metadata_tracker is None:
        redis_config = RedisConfig()
        redis_manager = create_redis_manager(redis_config)
        container.register_singleton(RedisConnectionManager, redis_manager)
        metadata_tracker = RedisMetadataTracker(
            create_redis_repository(redis_manager, redis_config)
        )

    if content_store is None:
        content_store = StorageFactory.create_storage(config.storage_backend)

    container.register_singleton(IMetadataTracker, metadata_tracker)
    container.register_singleton(IContentStore, content_store)

    validator = UploadValidator()
    container.register_singleton(UploadValidator, validator)

    event_publisher = EventPublisher()
    container.setup_event_handlers(event_publisher)
    container.register_singleton(EventPublisher, event_publisher)

    share_service = ShareService(
        validator,
        content_store,
        metadata_tracker,
        event_publisher=event_publisher,
        clock=clock,
    )
    container.register_singleton(ShareService, share_service)

    return container


def create_app(
    config: Optional[AppConfig] = None,
    container: Optional[DependencyContainer] = None,
) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Application configuration, uses default if None
        container: Prebuilt dependency container, built from config if None

    Returns:
        Configured Flask application
    """
    if config is None:
        config = AppConfig()

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.max_content_length_mb * 1024 * 1024
    app.app_config = config

    CORS(
        app,
        resources={
            r"/api/*": {
                "origins": "*",
                "methods": ["GET", "POST", "OPTIONS"],
                "allow_headers": ["Content-Type"],
            }
        },
    )

    if container is None:
        container = build_container(config)
    _initialize_services(app, container)

    _initialize_celery(app, config)

    _register_blueprints(app)

    return app


def _initialize_services(app: Flask, container: DependencyContainer) -> None:
    """
    Attach the container and the commonly-used service to the app.

    Args:
        app: Flask application
        container: Dependency container holding the services
    """
    app.container = container
    app.share_service = container.resolve(ShareService)

    content_store = container.resolve(IContentStore)
    logger.info(
        f"Application services initialized (content store: {content_store.backend_name})"
    )


def _initialize_celery(app: Flask, config: AppConfig) -> None:
    """
    Initialize Celery for the optional purge task.

    Args:
        app: Flask application
        config: Application configuration
    """
    app.celery = None
    if not config.celery_enabled:
        logger.info("Celery disabled")
        return

    try:
        app.celery = make_celery(app)
        logger.info("Celery initialized successfully")
    except Exception as e:
        logger.warning(f"Could not initialize Celery: {e}")


def _register_blueprints(app: Flask) -> None:
    """
    Register the web routes and the JSON API.

    Args:
        app: Flask application
    """
    from cloudshare.api.v1 import api_v1_bp
    from cloudshare.api.web import web_bp

    app.register_blueprint(web_bp)
    app.register_blueprint(api_v1_bp)

    logger.info("API v1 registered at /api/v1 with Swagger UI at /api/v1/docs")
