"""Error type shared by route handlers and upstream clients.

Every failure the proxy can report is a :class:`ProxyError`.  Handlers and
clients raise it at the point where the failure is detected; a single
exception handler registered on the application renders it as
``{"error": ..., "details": ...}`` with the carried status code.
"""

from __future__ import annotations

from typing import Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body of every error reply."""

    error: str
    details: Optional[str] = None


class ProxyError(Exception):
    """A failure that is reported to the caller as a JSON error object."""

    def __init__(self, status_code: int, error: str, details: Optional[str] = None) -> None:
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details

    def to_response(self) -> JSONResponse:
        body = ErrorResponse(error=self.error, details=self.details)
        return JSONResponse(
            status_code=self.status_code,
            content=body.model_dump(exclude_none=True),
        )
