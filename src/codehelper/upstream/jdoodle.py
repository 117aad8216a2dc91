"""
Client for the JDoodle code execution API.

The language and compiler version are pinned by configuration; callers
only supply the source.  JDoodle's JSON reply (output, statusCode,
memory, cpuTime, or an ``error`` object) is relayed verbatim.
"""

from __future__ import annotations

from typing import Any

from .base import UpstreamCall, UpstreamClient


class JDoodleClient(UpstreamClient):
    """Run code snippets on JDoodle."""

    name = "JDoodle"
    transport_error = "Failed to call JDoodle API"

    @property
    def configured(self) -> bool:
        return self.config.jdoodle_configured

    def build_call(self, code: str) -> UpstreamCall:
        return UpstreamCall(
            method="POST",
            url=self.config.jdoodle_url,
            json={
                "script": code,
                "language": self.config.jdoodle_language,
                "versionIndex": self.config.jdoodle_version_index,
                "clientId": self.config.jdoodle_client_id,
                "clientSecret": self.config.jdoodle_client_secret,
            },
        )

    async def execute(self, code: str) -> Any:
        self.ensure_configured()
        response = await self.send(self.build_call(code))
        # JDoodle reports credit and compile problems in the body; relay as-is.
        return self.parse_json(response)
