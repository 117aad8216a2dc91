"""
Client for a local Ollama model server.

Requests are non-streaming, so the server answers with one JSON object
whose ``response`` field holds the full completion.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..errors import ProxyError
from .base import UpstreamCall, UpstreamClient

logger = logging.getLogger("codehelper.upstream")


class OllamaClient(UpstreamClient):
    """Generate completions with a locally served model."""

    name = "Ollama"
    transport_error = "Failed to contact Ollama"

    def build_call(self, prompt: str, model: Optional[str] = None) -> UpstreamCall:
        return UpstreamCall(
            method="POST",
            url=f"{self.config.ollama_host}/api/generate",
            json={
                "model": model or self.config.ollama_default_model,
                "prompt": prompt,
                "stream": False,
            },
        )

    async def generate(self, prompt: str, model: Optional[str] = None) -> Optional[str]:
        response = await self.send(self.build_call(prompt, model))
        if not response.is_success:
            raise self.upstream_failure(response, self.transport_error, status_code=500)
        data = self.parse_json(response)
        if not isinstance(data, dict) or not isinstance(data.get("response"), (str, type(None))):
            logger.error("%s returned a reply without a text response field: %s", self.name, response.text[:500])
            raise ProxyError(500, self.transport_error, response.text)
        return data.get("response")
