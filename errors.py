"""
Errors raised by the listing and order contracts.

Every error carries the HTTP status it is reported with; the app renders
them all as ``{"success": false, "message": ...}``.
"""
from typing import Optional


class PawMartError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(PawMartError):
    status_code = 400


class InvalidIdentifier(PawMartError):
    status_code = 400


class NotFound(PawMartError):
    status_code = 404


# Reads and deletes report 500, creates and updates report 400.
class StoreError(PawMartError):
    status_code = 500
