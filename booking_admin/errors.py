"""
Fault types raised by the backend adapters.

Codes follow the Firebase vocabulary so the message mapping in
shared/messages.py can stay a plain lookup table.
"""

from typing import Optional

from google.api_core import exceptions as google_exceptions


class StoreError(Exception):
    """A document store call failed"""

    def __init__(self, code: str, message: str = ""):
        super().__init__(message or code)
        self.code = code
        self.message = message


class AuthError(Exception):
    """The identity provider rejected or failed a call"""

    def __init__(self, code: str, message: str = ""):
        super().__init__(message or code)
        self.code = code
        self.message = message


# Checked in order; subclasses must come before their parents
_STORE_ERROR_CODES = (
    (google_exceptions.PermissionDenied, "permission-denied"),
    (google_exceptions.Unauthenticated, "unauthenticated"),
    (google_exceptions.ServiceUnavailable, "unavailable"),
    # Raised by the client's retry wrapper once its deadline runs out
    (google_exceptions.RetryError, "unavailable"),
    (google_exceptions.DeadlineExceeded, "deadline-exceeded"),
    (google_exceptions.NotFound, "not-found"),
    (google_exceptions.AlreadyExists, "already-exists"),
    (google_exceptions.FailedPrecondition, "failed-precondition"),
    (google_exceptions.InvalidArgument, "invalid-argument"),
)


def store_error_from(exc: Exception) -> StoreError:
    """Convert a Google API fault into a StoreError"""
    for exc_type, code in _STORE_ERROR_CODES:
        if isinstance(exc, exc_type):
            return StoreError(code, _fault_text(exc))
    return StoreError("unknown", _fault_text(exc))


def _fault_text(exc: Exception) -> str:
    message: Optional[str] = getattr(exc, "message", None)
    return message or str(exc)
