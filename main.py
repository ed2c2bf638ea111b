"""
main.py

Flask server for CloudShare: upload an image, get a share link that
expires after 10 minutes.

Dependencies:
  - Python packages: Flask, flask-restx, flask-cors, redis, celery, google-cloud-storage
  - Infrastructure: Redis server; a GCS bucket or a local storage directory

Notes:
  - Upload form at /, JSON API at /api/v1 with Swagger docs at /api/v1/docs
  - Uses application factory pattern for better testability
"""

import os

from app_factory import create_app
from cloudshare.config.logging_config import setup_logging

setup_logging()

app = create_app()

if __name__ == "__main__":
    host = os.getenv("FLASK_HOST", "0.0.0.0")
    port = int(os.getenv("FLASK_PORT", 8000))
    debug = os.getenv("FLASK_DEBUG", "false").lower() == "true"

    app.run(host=host, port=port, debug=debug)
