"""
API Models for request parsing and Swagger documentation
"""

from flask_restx import fields, reqparse
from werkzeug.datastructures import FileStorage

from cloudshare.api.v1 import api

# =============================================================================
# Request Parsers
# =============================================================================

upload_parser = reqparse.RequestParser()
upload_parser.add_argument(
    "file",
    type=FileStorage,
    location="files",
    required=False,
    help="Image file (JPG, PNG or WebP, max 10 MB)",
)

recent_parser = reqparse.RequestParser()
recent_parser.add_argument(
    "count", type=int, location="args", required=False,
    help="Maximum number of uploads to return",
)

# =============================================================================
# Response Models
# =============================================================================

upload_record = api.model(
    "UploadRecord",
    {
        "key": fields.String(
            description="Share key, also the content object name",
            example="3f2b9c1e-8a47-4d55-9b0e-2c6f1a7d9e10.png",
        ),
        "original_name": fields.String(description="Filename supplied by the uploader"),
        "size_bytes": fields.Integer(description="Stored size in bytes"),
        "content_type": fields.String(description="MIME type", example="image/png"),
        "uploaded_at": fields.String(description="Upload time (ISO 8601, UTC)"),
        "uploaded_by": fields.String(description="Uploader identity", example="anonymous"),
    },
)

upload_response = api.inherit(
    "UploadResponse",
    upload_record,
    {
        "share_path": fields.String(description="Relative download link", example="/download/<key>"),
        "expires_at": fields.String(description="Link expiry (ISO 8601, UTC)"),
    },
)

share_info_response = api.inherit(
    "ShareInfo",
    upload_response,
    {
        "live": fields.Boolean(description="Whether the link can still be used"),
        "remaining_seconds": fields.Integer(description="Seconds until expiry (0 if expired)"),
        "download_count": fields.Integer(description="Number of recorded downloads"),
    },
)

recent_uploads_response = api.model(
    "RecentUploads",
    {
        "uploads": fields.List(fields.Nested(upload_record)),
        "count": fields.Integer(description="Number of uploads returned"),
    },
)

health_response = api.model(
    "HealthResponse",
    {
        "status": fields.String(description="ok or degraded"),
        "metadata_store": fields.String(description="Metadata store status"),
        "content_store": fields.String(description="Content store status"),
        "storage_backend": fields.String(description="Active content store backend"),
        "celery": fields.String(description="Task queue availability"),
    },
)

error_response = api.model(
    "ErrorResponse",
    {
        "error": fields.String(description="Error category"),
        "title": fields.String(description="Error title"),
        "message": fields.String(description="User-facing error message"),
        "action": fields.String(description="Suggested action"),
        "details": fields.String(description="Technical details (development only)"),
    },
)
