"""
Upload Validator

Checks an inbound file against the static upload policy.
"""

from typing import Optional

from .value_objects import RejectionReason, UploadCandidate, UploadPolicy, ValidationResult


class UploadValidator:
    """
    Domain service that accepts or rejects an upload candidate.

    Checks run in a fixed order: presence, size, then extension. The
    validator has no side effects, so a rejected file never reaches the
    content store.
    """

    def __init__(self, policy: Optional[UploadPolicy] = None):
        self.policy = policy or UploadPolicy()

    def validate(self, candidate: Optional[UploadCandidate]) -> ValidationResult:
        """
        Validate an upload candidate.

        Args:
            candidate: File received from the client, or None if no file was sent

        Returns:
            ValidationResult that is either accepted or carries a RejectionReason
        """
        if candidate is None or not candidate.filename or candidate.size_bytes == 0:
            return ValidationResult.rejected(RejectionReason.MISSING)

        if candidate.size_bytes > self.policy.max_bytes:
            return ValidationResult.rejected(RejectionReason.TOO_LARGE)

        if not self.policy.allows_extension(candidate.extension):
            return ValidationResult.rejected(RejectionReason.UNSUPPORTED_TYPE)

        return ValidationResult.accepted()
