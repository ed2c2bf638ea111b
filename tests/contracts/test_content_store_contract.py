"""
Contract tests for IContentStore implementations.

Every adapter must satisfy the same put/get/delete semantics. The GCS
adapter runs against an in-memory fake bucket.
"""

from io import BytesIO

import pytest
from google.cloud.exceptions import NotFound

from cloudshare.domain.file_sharing.repositories import IContentStore
from cloudshare.infrastructure.gcs_content_store import GCSContentStore
from cloudshare.infrastructure.local_content_store import LocalContentStore
from tests.fixtures import MockContentStore

KEY = "3f2b9c1e-8a47-4d55-9b0e-2c6f1a7d9e10.png"


class _FakeBlob:
    def __init__(self, bucket, name):
        self._bucket = bucket
        self.name = name

    def upload_from_string(self, data, content_type=None):
        self._bucket.objects[self.name] = bytes(data)

    def upload_from_file(self, stream, content_type=None):
        self._bucket.objects[self.name] = stream.read()

    def download_as_bytes(self):
        if self.name not in self._bucket.objects:
            raise NotFound(f"No such object: {self.name}")
        return self._bucket.objects[self.name]

    def delete(self):
        if self.name not in self._bucket.objects:
            raise NotFound(f"No such object: {self.name}")
        del self._bucket.objects[self.name]


class _FakeBucket:
    name = "contract-bucket"

    def __init__(self):
        self.objects = {}

    def blob(self, name):
        return _FakeBlob(self, name)

    def exists(self):
        return True


@pytest.fixture(params=["memory", "local", "gcs"])
def store(request, tmp_path) -> IContentStore:
    if request.param == "memory":
        return MockContentStore()
    if request.param == "local":
        return LocalContentStore(str(tmp_path))
    return GCSContentStore(_FakeBucket())


def test_is_content_store(store):
    assert isinstance(store, IContentStore)


def test_get_returns_what_was_put(store):
    store.put(KEY, b"\x89PNG payload", "image/png")

    stream = store.get(KEY)

    assert stream.read() == b"\x89PNG payload"


def test_put_accepts_streams(store):
    store.put(KEY, BytesIO(b"streamed"), "image/png")

    assert store.get(KEY).read() == b"streamed"


def test_get_missing_returns_none(store):
    assert store.get(KEY) is None


def test_delete_reports_whether_object_existed(store):
    store.put(KEY, b"x", "image/png")

    assert store.delete(KEY) is True
    assert store.delete(KEY) is False
    assert store.get(KEY) is None


def test_health_check(store):
    assert store.health_check() is True
