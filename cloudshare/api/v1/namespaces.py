"""
API Namespaces - Organized endpoint groups
"""

from flask import current_app
from flask_restx import Namespace, Resource

from cloudshare.api.error_mapping import error_response_for
from cloudshare.api.v1.models import (
    error_response,
    health_response,
    recent_parser,
    recent_uploads_response,
    share_info_response,
    upload_parser,
    upload_response,
)
from cloudshare.api.web import candidate_from_upload
from cloudshare.application.share_service import ShareService
from cloudshare.domain.errors import DomainError, ErrorCategory, create_error_response
from cloudshare.domain.file_sharing.entities import ANONYMOUS


def _share_service() -> ShareService:
    return current_app.container.resolve(ShareService)


def _expose_details() -> bool:
    return current_app.app_config.expose_error_details


# =============================================================================
# Uploads Namespace - Upload and share-link operations
# =============================================================================

uploads_ns = Namespace("uploads", description="Upload and share-link operations")


@uploads_ns.route("/")
class Uploads(Resource):
    """Create a share link"""

    @uploads_ns.doc("create_upload")
    @uploads_ns.expect(upload_parser)
    @uploads_ns.response(201, "Created", upload_response)
    @uploads_ns.response(400, "Rejected by upload policy", error_response)
    @uploads_ns.response(500, "Storage failure", error_response)
    def post(self):
        """
        Upload an image

        Stores the file and returns a share link that stays valid for 10 minutes.
        """
        args = upload_parser.parse_args()
        candidate = candidate_from_upload(args.get("file"))

        service = _share_service()
        result = service.upload(candidate, ANONYMOUS)
        if not result.success:
            return error_response_for(result.error, _expose_details())

        body = result.record.to_dict()
        body.update({
            "share_path": result.share_path,
            "expires_at": result.record.expires_at(service.ttl).isoformat(),
        })
        return body, 201


@uploads_ns.route("/recent")
class RecentUploads(Resource):
    """Recent uploads listing"""

    @uploads_ns.doc("list_recent_uploads")
    @uploads_ns.expect(recent_parser)
    @uploads_ns.response(200, "Success", recent_uploads_response)
    def get(self):
        """
        List recent uploads, newest first

        Best-effort: returns an empty list when the metadata store is unavailable.
        """
        args = recent_parser.parse_args()
        count = args.get("count")
        if count is None:
            count = current_app.app_config.recent_uploads_count

        records = _share_service().recent_uploads(count)
        return {"uploads": [record.to_dict() for record in records], "count": len(records)}, 200


@uploads_ns.route("/<string:key>")
@uploads_ns.param("key", "The share key")
class ShareInfo(Resource):
    """Share link details"""

    @uploads_ns.doc("get_share_info")
    @uploads_ns.response(200, "Success", share_info_response)
    @uploads_ns.response(404, "Unknown key", error_response)
    @uploads_ns.response(500, "Storage failure", error_response)
    def get(self, key):
        """
        Describe a share link

        Expired links are reported with ``live: false`` instead of an error.
        """
        try:
            return _share_service().get_share_info(key), 200
        except DomainError as e:
            return error_response_for(e, _expose_details(), context={"key": key})


# =============================================================================
# System Namespace - Health checks
# =============================================================================

system_ns = Namespace("system", description="System status")


@system_ns.route("/health")
class Health(Resource):
    """Dependency health"""

    @system_ns.doc("health_check")
    @system_ns.response(200, "Healthy", health_response)
    @system_ns.response(503, "Degraded", health_response)
    def get(self):
        """
        Health check

        Reports metadata store, content store and task queue status.
        """
        container = getattr(current_app, "container", None)
        if container is None:
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR,
                "Services not initialized",
                status_code=503,
            )

        service = container.resolve(ShareService)
        health_status = {
            "status": "ok",
            "metadata_store": "unknown",
            "content_store": "unknown",
            "storage_backend": service.content_store.backend_name,
            "celery": "unknown",
        }

        if service.metadata_tracker.health_check():
            health_status["metadata_store"] = "connected"
        else:
            health_status["metadata_store"] = "disconnected"
            health_status["status"] = "degraded"

        if service.content_store.health_check():
            health_status["content_store"] = "available"
        else:
            health_status["content_store"] = "unavailable"
            health_status["status"] = "degraded"

        # Celery only runs the optional purge task
        if getattr(current_app, "celery", None) is not None:
            health_status["celery"] = "available"
        else:
            health_status["celery"] = "unavailable"

        status_code = 200 if health_status["status"] == "ok" else 503
        return health_status, status_code
