"""Shared test fixtures: in-memory stores, a fake clock and domain builders."""

from .domain_fixtures import MIB, image_bytes, make_candidate, make_record
from .mock_repositories import FakeClock, MockContentStore, MockMetadataTracker

__all__ = [
    "MIB",
    "FakeClock",
    "MockContentStore",
    "MockMetadataTracker",
    "image_bytes",
    "make_candidate",
    "make_record",
]
