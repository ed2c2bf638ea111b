"""
API v1 - CloudShare REST API

JSON endpoints for the share-link workflow with OpenAPI/Swagger documentation.
"""

from flask import Blueprint
from flask_restx import Api
from werkzeug.exceptions import RequestEntityTooLarge

from cloudshare.api.error_mapping import error_response_for, oversized_request_error

api_v1_bp = Blueprint("api_v1", __name__, url_prefix="/api/v1")

# Swagger UI is served at /api/v1/docs
api = Api(
    api_v1_bp,
    version="1.0",
    title="CloudShare API",
    description="Upload images and share them through links that expire after 10 minutes",
    doc="/docs",
)

# Import namespaces after api is created to avoid circular imports
from .namespaces import system_ns, uploads_ns  # noqa: E402

api.add_namespace(uploads_ns, path="/uploads")
api.add_namespace(system_ns, path="/system")


@api.errorhandler(RequestEntityTooLarge)
def request_too_large(e):
    """Oversized bodies get the same JSON error shape as a policy rejection."""
    return error_response_for(oversized_request_error())
