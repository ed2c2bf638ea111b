"""
Integration tests for RedisMetadataTracker against a real Redis server.
"""

from datetime import datetime, timedelta, timezone

import pytest

from cloudshare.application.event_publisher import EventPublisher
from cloudshare.application.share_service import ShareService
from cloudshare.domain.errors import ErrorCategory
from cloudshare.domain.file_sharing.validator import UploadValidator
from cloudshare.infrastructure.local_content_store import LocalContentStore
from cloudshare.infrastructure.redis_metadata_tracker import RedisMetadataTracker
from cloudshare.infrastructure.redis_repository import RedisRepository
from tests.fixtures import FakeClock, make_candidate, make_record

T0 = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def tracker(redis_client):
    return RedisMetadataTracker(RedisRepository(redis_client, "cloudshare-test"))


def test_upload_record_round_trip(tracker, redis_client):
    record = make_record(uploaded_at=T0)

    tracker.track_upload(record)

    assert tracker.get_metadata(record.key) == record
    assert redis_client.exists(f"cloudshare-test:upload:{record.key}")


def test_upload_record_has_no_ttl(tracker, redis_client):
    record = make_record(uploaded_at=T0)

    tracker.track_upload(record)

    # -1 means the key exists with no expiry
    assert redis_client.ttl(f"cloudshare-test:upload:{record.key}") == -1


def test_downloads_are_kept_after_metadata_removal(tracker):
    record = make_record(uploaded_at=T0)
    tracker.track_upload(record)
    tracker.track_download(record.key, "alice", T0 + timedelta(minutes=1))
    tracker.track_download(record.key, "bob", T0 + timedelta(minutes=2))

    assert tracker.remove_metadata(record.key) is True

    events = tracker.get_downloads(record.key)
    assert [e.downloaded_by for e in events] == ["alice", "bob"]
    assert events[0].downloaded_at == T0 + timedelta(minutes=1)


def test_corrupt_record_reads_as_missing(tracker, redis_client):
    redis_client.set("cloudshare-test:upload:broken.png", b"{not json")

    assert tracker.get_metadata("broken.png") is None


def test_list_uploads_scans_only_its_prefix(tracker, redis_client):
    tracker.track_upload(make_record(key="a.png", uploaded_at=T0))
    tracker.track_upload(make_record(key="b.png", uploaded_at=T0))
    redis_client.set("other-app:upload:c.png", b"{}")

    assert sorted(r.key for r in tracker.list_uploads()) == ["a.png", "b.png"]


def test_health_check(tracker):
    assert tracker.health_check() is True


def test_share_workflow_with_redis_and_local_storage(tracker, tmp_path):
    clock = FakeClock(T0)
    service = ShareService(
        UploadValidator(),
        LocalContentStore(str(tmp_path)),
        tracker,
        event_publisher=EventPublisher(),
        clock=clock,
    )

    uploaded = service.upload(make_candidate(size=2048))
    assert uploaded.success

    clock.advance(minutes=5)
    downloaded = service.download(uploaded.key, "alice")
    assert downloaded.success
    assert len(downloaded.content.read()) == 2048
    downloaded.content.close()

    clock.advance(minutes=6)
    expired = service.download(uploaded.key)
    assert expired.error_category is ErrorCategory.FILE_EXPIRED

    stats = service.purge_expired()
    assert stats == {"scanned": 1, "purged": 1, "errors": []}
    assert tracker.get_metadata(uploaded.key) is None
    assert len(tracker.get_downloads(uploaded.key)) == 1
