"""
Unit tests for UploadValidator.

Covers the presence, size and extension checks and the order in which
they are applied.
"""

import pytest

from cloudshare.domain.file_sharing.validator import UploadValidator
from cloudshare.domain.file_sharing.value_objects import (
    MAX_UPLOAD_BYTES,
    RejectionReason,
    UploadCandidate,
    UploadPolicy,
)
from tests.fixtures import MIB, make_candidate


@pytest.fixture
def validator():
    return UploadValidator()


class TestPresence:
    def test_none_is_missing(self, validator):
        result = validator.validate(None)

        assert not result.ok
        assert result.reason is RejectionReason.MISSING

    def test_empty_filename_is_missing(self, validator):
        result = validator.validate(UploadCandidate(filename="", content=b"abc"))

        assert result.reason is RejectionReason.MISSING

    def test_zero_byte_file_is_missing(self, validator):
        result = validator.validate(UploadCandidate(filename="empty.png", content=b""))

        assert result.reason is RejectionReason.MISSING


class TestSize:
    def test_exactly_max_size_is_accepted(self, validator):
        result = validator.validate(make_candidate("photo.jpg", size=MAX_UPLOAD_BYTES))

        assert result.ok

    def test_one_byte_over_max_is_too_large(self, validator):
        result = validator.validate(make_candidate("photo.jpg", size=MAX_UPLOAD_BYTES + 1))

        assert result.reason is RejectionReason.TOO_LARGE

    def test_eleven_mib_jpg_is_too_large(self, validator):
        result = validator.validate(make_candidate("holiday.jpg", size=11 * MIB))

        assert result.reason is RejectionReason.TOO_LARGE

    def test_size_is_checked_before_extension(self, validator):
        result = validator.validate(make_candidate("setup.exe", size=11 * MIB))

        assert result.reason is RejectionReason.TOO_LARGE

    def test_custom_policy_limit(self):
        validator = UploadValidator(UploadPolicy(max_bytes=100))

        assert validator.validate(make_candidate(size=100)).ok
        assert validator.validate(make_candidate(size=101)).reason is RejectionReason.TOO_LARGE


class TestExtension:
    @pytest.mark.parametrize("filename", [
        "a.jpg", "a.jpeg", "a.png", "a.webp", "A.JPG", "photo.Png", "my.holiday.WebP",
    ])
    def test_allowed_extensions_are_accepted(self, validator, filename):
        assert validator.validate(make_candidate(filename)).ok

    @pytest.mark.parametrize("filename", [
        "setup.exe", "image.gif", "notes.txt", "noextension", "archive.png.zip", ".png",
    ])
    def test_other_extensions_are_unsupported(self, validator, filename):
        result = validator.validate(make_candidate(filename))

        assert result.reason is RejectionReason.UNSUPPORTED_TYPE

    def test_windows_style_path_uses_last_component(self, validator):
        assert validator.validate(make_candidate("C:\\Users\\me\\photo.png")).ok


def test_rejection_reasons_map_to_distinct_categories():
    categories = {reason.category for reason in RejectionReason}

    assert len(categories) == len(RejectionReason)
