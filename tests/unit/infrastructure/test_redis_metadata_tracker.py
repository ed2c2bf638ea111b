"""
Unit tests for RedisRepository and RedisMetadataTracker.

The Redis client is a Mock, so these tests check key layout, JSON encoding
and error translation without a server.
"""

import json
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from cloudshare.domain.errors import BackendError
from cloudshare.infrastructure.redis_metadata_tracker import RedisMetadataTracker
from cloudshare.infrastructure.redis_repository import RedisRepository
from tests.fixtures import make_record

T0 = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def redis_client():
    client = Mock()
    client.set.return_value = True
    client.get.return_value = None
    client.delete.return_value = 1
    client.rpush.return_value = 1
    client.lrange.return_value = []
    client.scan_iter.return_value = iter([])
    client.ping.return_value = True
    return client


@pytest.fixture
def tracker(redis_client):
    return RedisMetadataTracker(RedisRepository(redis_client, "cloudshare"))


class TestRedisRepository:
    def test_keys_are_prefixed(self, redis_client):
        repo = RedisRepository(redis_client, "app")

        repo.set_json("upload:k", {"a": 1})

        redis_client.set.assert_called_once_with("app:upload:k", json.dumps({"a": 1}))

    def test_ttl_uses_setex(self, redis_client):
        RedisRepository(redis_client).set_json("k", {"a": 1}, ttl=60)

        redis_client.setex.assert_called_once_with("k", 60, json.dumps({"a": 1}))

    def test_get_json_decodes_bytes(self, redis_client):
        redis_client.get.return_value = b'{"a": 1}'

        assert RedisRepository(redis_client).get_json("k") == {"a": 1}

    def test_corrupt_json_returns_none(self, redis_client):
        redis_client.get.return_value = b"{not json"

        assert RedisRepository(redis_client).get_json("k") is None

    def test_iter_keys_strips_prefix(self, redis_client):
        redis_client.scan_iter.return_value = iter([b"app:upload:a.png", b"app:upload:b.png"])

        keys = list(RedisRepository(redis_client, "app").iter_keys("upload:*"))

        redis_client.scan_iter.assert_called_once_with(match="app:upload:*")
        assert keys == ["upload:a.png", "upload:b.png"]

    def test_get_json_list_skips_corrupt_entries(self, redis_client):
        redis_client.lrange.return_value = [b'{"a": 1}', b"oops", b'{"a": 2}']

        assert RedisRepository(redis_client).get_json_list("k") == [{"a": 1}, {"a": 2}]

    def test_client_errors_propagate(self, redis_client):
        redis_client.get.side_effect = RedisConnectionError("down")

        with pytest.raises(RedisConnectionError):
            RedisRepository(redis_client).get_json("k")


class TestTrackUpload:
    def test_stores_record_without_ttl(self, tracker, redis_client):
        record = make_record(key="k.png", uploaded_at=T0)

        tracker.track_upload(record)

        redis_client.set.assert_called_once_with(
            "cloudshare:upload:k.png", json.dumps(record.to_dict())
        )
        redis_client.setex.assert_not_called()

    def test_redis_error_becomes_backend_error(self, tracker, redis_client):
        redis_client.set.side_effect = RedisConnectionError("down")

        with pytest.raises(BackendError) as exc_info:
            tracker.track_upload(make_record())

        assert isinstance(exc_info.value.original_error, RedisConnectionError)

    def test_unacknowledged_write_is_backend_error(self, tracker, redis_client):
        redis_client.set.return_value = None

        with pytest.raises(BackendError):
            tracker.track_upload(make_record())


class TestGetMetadata:
    def test_returns_record(self, tracker, redis_client):
        record = make_record(key="k.png", uploaded_at=T0)
        redis_client.get.return_value = json.dumps(record.to_dict()).encode()

        assert tracker.get_metadata("k.png") == record
        redis_client.get.assert_called_once_with("cloudshare:upload:k.png")

    def test_unknown_key_returns_none(self, tracker):
        assert tracker.get_metadata("missing.png") is None

    def test_malformed_record_returns_none(self, tracker, redis_client):
        redis_client.get.return_value = b'{"key": "k.png"}'

        assert tracker.get_metadata("k.png") is None

    def test_redis_error_becomes_backend_error(self, tracker, redis_client):
        redis_client.get.side_effect = RedisConnectionError("down")

        with pytest.raises(BackendError):
            tracker.get_metadata("k.png")


class TestDownloads:
    def test_track_download_appends_event(self, tracker, redis_client):
        event = tracker.track_download("k.png", "alice", T0)

        redis_client.rpush.assert_called_once_with(
            "cloudshare:downloads:k.png", json.dumps(event.to_dict())
        )
        assert event.downloaded_by == "alice"

    def test_get_downloads(self, tracker, redis_client):
        event = tracker.track_download("k.png", "alice", T0)
        redis_client.lrange.return_value = [json.dumps(event.to_dict()).encode()]

        assert tracker.get_downloads("k.png") == [event]

    def test_track_download_error(self, tracker, redis_client):
        redis_client.rpush.side_effect = RedisConnectionError("down")

        with pytest.raises(BackendError):
            tracker.track_download("k.png", "alice")


class TestRemoveAndList:
    def test_remove_existing(self, tracker, redis_client):
        assert tracker.remove_metadata("k.png") is True
        redis_client.delete.assert_called_once_with("cloudshare:upload:k.png")

    def test_remove_missing(self, tracker, redis_client):
        redis_client.delete.return_value = 0

        assert tracker.remove_metadata("k.png") is False

    def test_list_uploads_scans_upload_keys(self, tracker, redis_client):
        records = {
            "cloudshare:upload:a.png": make_record(key="a.png", uploaded_at=T0),
            "cloudshare:upload:b.png": make_record(key="b.png", uploaded_at=T0),
        }
        redis_client.scan_iter.return_value = iter(k.encode() for k in records)
        redis_client.get.side_effect = lambda k: json.dumps(records[k].to_dict()).encode()

        listed = tracker.list_uploads()

        assert sorted(r.key for r in listed) == ["a.png", "b.png"]
        redis_client.scan_iter.assert_called_once_with(match="cloudshare:upload:*")

    def test_list_uploads_error(self, tracker, redis_client):
        redis_client.scan_iter.side_effect = RedisConnectionError("down")

        with pytest.raises(BackendError):
            tracker.list_uploads()

    def test_health_check(self, tracker, redis_client):
        assert tracker.health_check() is True

        redis_client.ping.side_effect = RedisConnectionError("down")
        assert tracker.health_check() is False
