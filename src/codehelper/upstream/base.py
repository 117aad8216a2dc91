"""
Base interfaces and dataclasses for upstream clients.

All concrete clients inherit from :class:`UpstreamClient`.  A client turns
one validated request into exactly one :class:`UpstreamCall`, sends it on
the shared ``httpx.AsyncClient`` and maps the reply.  Transport failures
and unparseable bodies are converted to :class:`~codehelper.errors.ProxyError`
here, so route handlers only ever see mapped results or ``ProxyError``.

Clients never retry and never cache.  The shared HTTP client is owned by
the application; clients only borrow it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from ..config import Config
from ..errors import ProxyError

logger = logging.getLogger("codehelper.upstream")


@dataclass(frozen=True)
class UpstreamCall:
    """A single outbound request.

    Attributes
    ----------
    method: str
        HTTP method.
    url: str
        Target URL without query string.  Safe to log.
    json: Any
        Body, serialised as JSON.
    params: dict
        Query parameters.  May carry credentials and is never logged.
    headers: dict
        Extra request headers.
    """

    method: str
    url: str
    json: Any = None
    params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=lambda: {"Content-Type": "application/json"})


class UpstreamClient:
    """Shared plumbing for the three upstream clients.

    Subclasses set :attr:`name` (used in log lines and as the
    "not configured" message) and :attr:`transport_error` (the message
    returned to callers when the upstream cannot be reached or answers
    with something other than JSON).
    """

    name = "upstream"
    transport_error = "Failed to contact upstream"

    def __init__(self, http_client: httpx.AsyncClient, config: Config) -> None:
        self._client = http_client
        self.config = config

    @property
    def configured(self) -> bool:
        return True

    def ensure_configured(self) -> None:
        """Raise 503 when the credentials for this upstream are missing."""
        if not self.configured:
            logger.warning("%s called but its credentials are not configured", self.name)
            raise ProxyError(503, f"{self.name} is not configured")

    async def send(self, call: UpstreamCall) -> httpx.Response:
        """Send ``call`` and return the response, whatever its status."""
        logger.info("Calling %s: %s %s", self.name, call.method, call.url)
        try:
            response = await self._client.request(
                call.method,
                call.url,
                json=call.json,
                params=call.params or None,
                headers=call.headers,
            )
        except httpx.HTTPError as exc:
            logger.exception("Error contacting %s: %s", self.name, exc)
            raise ProxyError(500, self.transport_error) from exc
        logger.info("%s answered %s", self.name, response.status_code)
        return response

    def parse_json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            logger.error(
                "%s returned invalid JSON (status %s): %s",
                self.name,
                response.status_code,
                response.text[:500],
            )
            raise ProxyError(500, self.transport_error) from exc

    def upstream_failure(
        self, response: httpx.Response, error: str, status_code: Optional[int] = None
    ) -> ProxyError:
        """Log a non-OK reply and build the error carrying its body as details."""
        details = response.text
        logger.error("%s error (status %s): %s", self.name, response.status_code, details)
        return ProxyError(
            status_code if status_code is not None else response.status_code,
            error,
            details,
        )
