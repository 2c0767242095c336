"""Listing service errors.

Each error carries the HTTP status and the short error code used in the
API's error envelope, so routes can let them propagate.
"""
from __future__ import annotations


class ListingError(Exception):
    status_code = 500
    error = "listing_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SubmissionValidationError(ListingError):
    """Submission rejected before touching any store."""
    status_code = 422
    error = "validation_error"


class UploadError(ListingError):
    """Blob Store refused the image (collision, quota, network)."""
    status_code = 502
    error = "upload_error"


class RecordStoreError(ListingError):
    """Insert/update/query failure; the backend message is passed through verbatim."""
    status_code = 500
    error = "record_store_error"


class ListingNotFound(ListingError):
    status_code = 404
    error = "not_found"


class InvalidTransition(ListingError):
    status_code = 409
    error = "invalid_transition"
