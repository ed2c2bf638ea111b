"""
File Sharing Entities

Domain entities for uploaded files and their download audit trail.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

SHARE_LINK_TTL = timedelta(minutes=10)
ANONYMOUS = "anonymous"


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are treated as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_live(record: "UploadRecord", now: datetime, ttl: timedelta = SHARE_LINK_TTL) -> bool:
    """
    Check whether a record's share link is still usable at ``now``.

    The window is inclusive: a record is live at exactly
    ``uploaded_at + ttl`` and expired one instant later.

    Args:
        record: Upload record to check
        now: Reference time
        ttl: Length of the share window

    Returns:
        True if the link is live, False if it has expired
    """
    return _as_utc(now) <= record.expires_at(ttl)


@dataclass(frozen=True)
class UploadRecord:
    """
    Entity representing one uploaded file.

    Records are created once the content store accepted the bytes and are
    never modified afterwards. ``key`` doubles as the content store object name.
    """

    key: str
    original_name: str
    size_bytes: int
    content_type: str
    uploaded_at: datetime
    uploaded_by: str = ANONYMOUS

    def __post_init__(self):
        object.__setattr__(self, "uploaded_at", _as_utc(self.uploaded_at))

    def expires_at(self, ttl: timedelta = SHARE_LINK_TTL) -> datetime:
        return self.uploaded_at + ttl

    def is_live(self, now: datetime, ttl: timedelta = SHARE_LINK_TTL) -> bool:
        return is_live(self, now, ttl)

    def remaining_seconds(self, now: datetime, ttl: timedelta = SHARE_LINK_TTL) -> int:
        """
        Get remaining seconds until expiration.

        Returns:
            Seconds remaining (0 if expired)
        """
        remaining = self.expires_at(ttl) - _as_utc(now)
        return max(0, int(remaining.total_seconds()))

    def share_path(self) -> str:
        return f"/download/{self.key}"

    def get_size_mb(self) -> float:
        return round(self.size_bytes / (1024 * 1024), 2)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "key": self.key,
            "original_name": self.original_name,
            "size_bytes": self.size_bytes,
            "content_type": self.content_type,
            "uploaded_at": self.uploaded_at.isoformat(),
            "uploaded_by": self.uploaded_by,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UploadRecord":
        """Create UploadRecord from dictionary."""
        return cls(
            key=data["key"],
            original_name=data["original_name"],
            size_bytes=int(data["size_bytes"]),
            content_type=data["content_type"],
            uploaded_at=datetime.fromisoformat(data["uploaded_at"]),
            uploaded_by=data.get("uploaded_by") or ANONYMOUS,
        )


@dataclass(frozen=True)
class DownloadEvent:
    """Append-only audit entry written for each authorized download."""

    key: str
    downloaded_at: datetime
    downloaded_by: str = ANONYMOUS

    def __post_init__(self):
        object.__setattr__(self, "downloaded_at", _as_utc(self.downloaded_at))

    @classmethod
    def create(cls, key: str, downloaded_by: Optional[str] = None,
               now: Optional[datetime] = None) -> "DownloadEvent":
        return cls(
            key=key,
            downloaded_at=now or utc_now(),
            downloaded_by=downloaded_by or ANONYMOUS,
        )

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "downloaded_at": self.downloaded_at.isoformat(),
            "downloaded_by": self.downloaded_by,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DownloadEvent":
        return cls(
            key=data["key"],
            downloaded_at=datetime.fromisoformat(data["downloaded_at"]),
            downloaded_by=data.get("downloaded_by") or ANONYMOUS,
        )
