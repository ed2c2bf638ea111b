"""
Shared pytest fixtures and configuration for the CloudShare test suite.

This module provides:
- Hypothesis configuration for property-based testing
- In-memory store fixtures and a controllable clock
- ShareService and Flask app fixtures wired to the in-memory stores
"""

import pytest
from hypothesis import HealthCheck, Phase, settings

from app_factory import AppConfig, build_container, create_app
from cloudshare.application.event_publisher import EventPublisher
from cloudshare.application.share_service import ShareService
from cloudshare.domain.file_sharing.validator import UploadValidator
from tests.fixtures import FakeClock, MockContentStore, MockMetadataTracker

# Register Hypothesis profiles
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("default")


# =============================================================================
# Store and Clock Fixtures
# =============================================================================

@pytest.fixture
def clock():
    """Provide a clock frozen at 2024-01-15 12:00 UTC."""
    return FakeClock()


@pytest.fixture
def content_store():
    return MockContentStore()


@pytest.fixture
def metadata_tracker():
    return MockMetadataTracker()


@pytest.fixture
def event_publisher():
    return EventPublisher()


@pytest.fixture
def published_events(event_publisher):
    """Collect every event published through ``event_publisher``."""
    from cloudshare.domain.events import DomainEvent

    events = []
    event_publisher.subscribe(DomainEvent, events.append)
    return events


@pytest.fixture
def share_service(content_store, metadata_tracker, event_publisher, clock):
    """Provide a ShareService wired to in-memory stores and the fake clock."""
    return ShareService(
        UploadValidator(),
        content_store,
        metadata_tracker,
        event_publisher=event_publisher,
        clock=clock,
    )


# =============================================================================
# Flask Application Fixtures
# =============================================================================

@pytest.fixture
def app_config(monkeypatch):
    """Development configuration with Celery disabled."""
    monkeypatch.setenv("FLASK_ENV", "development")
    monkeypatch.setenv("CELERY_ENABLED", "false")
    monkeypatch.delenv("EXPOSE_ERROR_DETAILS", raising=False)
    return AppConfig()


@pytest.fixture
def app(app_config, content_store, metadata_tracker, clock):
    """Flask app whose container holds the in-memory stores."""
    container = build_container(
        app_config,
        content_store=content_store,
        metadata_tracker=metadata_tracker,
        clock=clock,
    )
    flask_app = create_app(app_config, container=container)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


# =============================================================================
# Pytest Configuration Hooks
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (require external services)"
    )
    config.addinivalue_line(
        "markers", "contract: Contract tests (verify interface compliance)"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests (full workflows)"
    )
    config.addinivalue_line(
        "markers", "property: Property-based tests using Hypothesis"
    )


def pytest_collection_modifyitems(config, items):
    """
    Automatically mark tests based on their location.

    - tests/unit/* -> @pytest.mark.unit
    - tests/integration/* -> @pytest.mark.integration
    - tests/contracts/* -> @pytest.mark.contract
    - tests/e2e/* -> @pytest.mark.e2e
    - tests/property/* -> @pytest.mark.property
    """
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path or "\\unit\\" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path or "\\integration\\" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/contracts/" in test_path or "\\contracts\\" in test_path:
            item.add_marker(pytest.mark.contract)
        elif "/e2e/" in test_path or "\\e2e\\" in test_path:
            item.add_marker(pytest.mark.e2e)
        elif "/property/" in test_path or "\\property\\" in test_path:
            item.add_marker(pytest.mark.property)
