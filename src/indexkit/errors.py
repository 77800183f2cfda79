"""Error codes and structured error model for the indexkit package.

``ErrorCode`` contains every error/warning code an upload can produce.
``IngestError`` is the Pydantic model carried on results; it records the
index and, for import failures, the batch that caused the issue.
``IndexKitException`` wraps an ``IngestError`` for the few fail-fast
preconditions that are raised rather than returned.  ``BackendHTTPError``
is what the HTTP backends raise for error status codes.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Error codes for file-upload indexing.

    Values equal their names so they are stable strings suitable for
    metrics and alerting.  ``E_`` prefix = fatal, ``W_`` prefix = warning.
    """

    # Preconditions
    E_NO_FILE = "E_NO_FILE"

    # Transform resolution
    E_TRANSFORM_MISSING = "E_TRANSFORM_MISSING"
    E_TRANSFORM_UNSUPPORTED = "E_TRANSFORM_UNSUPPORTED"
    E_TRANSFORM_NO_DETAILS = "E_TRANSFORM_NO_DETAILS"
    E_TRANSFORM_FAILED = "E_TRANSFORM_FAILED"

    # Import
    E_IMPORT_NO_INDEX = "E_IMPORT_NO_INDEX"
    E_IMPORT_BATCH_FAILED = "E_IMPORT_BATCH_FAILED"
    E_INDEX_CREATE_FAILED = "E_INDEX_CREATE_FAILED"

    # Index patterns
    E_PATTERN_CREATE_FAILED = "E_PATTERN_CREATE_FAILED"

    # Backend
    E_BACKEND_TIMEOUT = "E_BACKEND_TIMEOUT"
    E_BACKEND_CONNECT = "E_BACKEND_CONNECT"
    E_BACKEND_HTTP = "E_BACKEND_HTTP"

    # Warnings (non-fatal)
    W_IMPORT_RETRY = "W_IMPORT_RETRY"
    W_PATTERN_ID_NOT_FOUND = "W_PATTERN_ID_NOT_FOUND"


class IngestError(BaseModel):
    """Structured error with code, message, and upload location context."""

    code: ErrorCode
    message: str
    stage: str | None = None
    recoverable: bool = False
    index: str | None = None
    batch_index: int | None = None


class IndexKitException(Exception):
    """Raisable exception wrapping an :class:`IngestError`.

    Only used for preconditions checked before any work begins (no file,
    no transform).  Everything else is reported through result models.
    """

    def __init__(self, **kwargs: object) -> None:
        self.error = IngestError(**kwargs)  # type: ignore[arg-type]
        super().__init__(self.error.message)

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def stage(self) -> str | None:
        return self.error.stage


class BackendHTTPError(ConnectionError):
    """The server answered with an HTTP error status.

    Subclasses ``ConnectionError`` so callers that only distinguish
    timeouts from connection problems keep working.
    """

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code
