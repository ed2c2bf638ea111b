"""
CloudShare

Image upload service that hands out share links expiring ten minutes
after upload. File bytes live in an object store, upload and download
records live in Redis.
"""

__version__ = "1.0.0"
