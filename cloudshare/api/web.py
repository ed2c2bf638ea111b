"""
Web Routes

Server-rendered upload form plus the download and delete links that the
form hands out. All routes delegate to ShareService.
"""

import logging
from typing import Optional

from flask import Blueprint, current_app, render_template, request, send_file
from werkzeug.datastructures import FileStorage
from werkzeug.exceptions import RequestEntityTooLarge

from cloudshare.application.share_result import ShareResult
from cloudshare.domain.file_sharing.entities import ANONYMOUS, SHARE_LINK_TTL
from cloudshare.domain.file_sharing.value_objects import UploadCandidate

from .error_mapping import (
    describe_error,
    error_response_for,
    oversized_request_error,
    status_for,
)

logger = logging.getLogger(__name__)

web_bp = Blueprint("web", __name__, template_folder="templates")

UPLOAD_SUCCESS_MESSAGE = (
    f"Upload successful! Share this link "
    f"(expires in {int(SHARE_LINK_TTL.total_seconds() // 60)} min):"
)


def _caller_identity() -> str:
    return request.remote_user or ANONYMOUS


def _expose_details() -> bool:
    return current_app.app_config.expose_error_details


def candidate_from_upload(file: Optional[FileStorage]) -> Optional[UploadCandidate]:
    """
    Turn a multipart file field into an upload candidate.

    A missing field or an empty filename means no file was selected.
    """
    if file is None or not file.filename:
        return None

    return UploadCandidate(
        filename=file.filename,
        content=file.read(),
        content_type=file.mimetype or "application/octet-stream",
    )


def _render_index(status: int = 200, **context):
    share_service = current_app.share_service
    recent = share_service.recent_uploads(current_app.app_config.recent_uploads_count)
    return render_template("index.html", recent_uploads=recent, **context), status


def _text_failure(result: ShareResult):
    return describe_error(result.error, _expose_details()), status_for(result.error_category)


@web_bp.route("/", methods=["GET"])
def index():
    """Upload form with the recent uploads listing."""
    return _render_index()


@web_bp.route("/ping", methods=["GET"])
def ping():
    return "Server is running", 200


@web_bp.route("/Home/Upload", methods=["POST"])
def upload():
    """
    Upload workflow.

    Renders the form again with either the share link or the error message.
    """
    candidate = candidate_from_upload(request.files.get("file"))
    result = current_app.share_service.upload(candidate, _caller_identity())

    if not result.success:
        return _render_index(
            status=status_for(result.error_category),
            error=describe_error(result.error, _expose_details()),
        )

    return _render_index(
        success=UPLOAD_SUCCESS_MESSAGE,
        share_path=result.share_path,
        share_url=request.host_url.rstrip("/") + result.share_path,
        record=result.record,
    )


@web_bp.route("/download/<key>", methods=["GET"])
def download(key):
    """Stream the file for a live key as an attachment."""
    result = current_app.share_service.download(key, _caller_identity())
    if not result.success:
        return _text_failure(result)

    return send_file(
        result.content,
        mimetype="application/octet-stream",
        as_attachment=True,
        download_name=key,
    )


@web_bp.route("/delete/<key>", methods=["POST"])
def delete(key):
    result = current_app.share_service.delete(key)
    if not result.success:
        return _text_failure(result)
    return f"File deleted: {key}", 200


@web_bp.app_errorhandler(RequestEntityTooLarge)
def request_too_large(e):
    """Bodies above MAX_CONTENT_LENGTH never reach the validator."""
    error = oversized_request_error()
    logger.info(f"Rejected oversized request body on {request.path}")
    if request.path.startswith("/api/"):
        return error_response_for(error)
    return describe_error(error), status_for(error.category)
