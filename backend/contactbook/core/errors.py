# backend/contactbook/core/errors.py
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID = "invalid"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    PERSISTENCE = "persistence"
    STARTUP = "startup"


class ContactBookError(Exception):
    """Base for every error the API maps to a response (or refuses to start on)."""

    kind: ErrorKind

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_body(self) -> dict:
        body = {"message": self.message}
        if self.detail:
            body["error"] = self.detail
        return body


class ValidationError(ContactBookError):
    kind = ErrorKind.INVALID


class NotFoundError(ContactBookError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(ContactBookError):
    kind = ErrorKind.CONFLICT


class PersistenceError(ContactBookError):
    kind = ErrorKind.PERSISTENCE


class StartupError(ContactBookError):
    kind = ErrorKind.STARTUP


# StartupError never reaches a request; it aborts the process instead.
STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.INVALID: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.PERSISTENCE: 500,
    ErrorKind.STARTUP: 500,
}


def status_for(exc: ContactBookError) -> int:
    return STATUS_CODES[exc.kind]
