from typing import Any, Optional


class TripSyncError(Exception):
    """Base for every error a client may be told about."""

    code = "internal_error"
    status_code = 500

    def __init__(self, message: str, detail: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict:
        payload = {"code": self.code, "message": self.message}
        if self.detail is not None:
            payload["detail"] = self.detail
        return payload


class PayloadValidationError(TripSyncError):
    code = "invalid_payload"
    status_code = 422


class NotFoundError(TripSyncError):
    code = "not_found"
    status_code = 404


class PersistenceError(TripSyncError):
    code = "persistence_error"
    status_code = 500


class PlaceLookupError(RuntimeError):
    """Raised when the place lookup service fails (timeout, quota, bad response)."""
