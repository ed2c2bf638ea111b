"""
Application Services Layer

Orchestrates domain services and coordinates use cases.
"""

from .dependency_container import DependencyContainer, DependencyNotFoundError
from .event_publisher import EventPublisher
from .share_result import ShareResult
from .share_service import ShareService

__all__ = [
    'DependencyContainer',
    'DependencyNotFoundError',
    'EventPublisher',
    'ShareResult',
    'ShareService',
]
