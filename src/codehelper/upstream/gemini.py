"""
Client for the Gemini generative language API.

Two operations share the ``models/{model}:generateContent`` endpoint:

* :meth:`GeminiClient.ask` sends a single user turn to the text model and
  extracts the first candidate's text, falling back to
  :data:`NO_ANSWER` when the reply carries none.
* :meth:`GeminiClient.generate` asks the image model for text and image
  output and returns the reply untouched.

The API key travels as the ``key`` query parameter and is kept out of the
logged URL.
"""

from __future__ import annotations

from typing import Any, Dict

from .base import UpstreamCall, UpstreamClient

NO_ANSWER = "⚠ No response from Gemini AI."

PERMISSION_DENIED = (
    'API Key does not have permission. Please enable the "Vertex AI API" '
    "in your Google Cloud project."
)
RATE_LIMITED = "Too many requests. Please wait and try again."


def extract_answer(payload: Any) -> str:
    """Return ``candidates[0].content.parts[0].text`` or :data:`NO_ANSWER`."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return NO_ANSWER
    if not isinstance(text, str) or not text:
        return NO_ANSWER
    return text


class GeminiClient(UpstreamClient):
    """Single-turn questions and text+image generation against Gemini."""

    name = "Gemini"
    transport_error = "Failed to contact Gemini API"

    @property
    def configured(self) -> bool:
        return self.config.gemini_configured

    def _call(self, model: str, body: Dict[str, Any]) -> UpstreamCall:
        return UpstreamCall(
            method="POST",
            url=f"{self.config.gemini_base_url}/models/{model}:generateContent",
            json=body,
            params={"key": self.config.gemini_api_key},
        )

    def build_ask_call(self, question: str) -> UpstreamCall:
        return self._call(
            self.config.gemini_text_model,
            {"contents": [{"role": "user", "parts": [{"text": question}]}]},
        )

    def build_generate_call(self, prompt: str) -> UpstreamCall:
        return self._call(
            self.config.gemini_image_model,
            {
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {"responseModalities": ["TEXT", "IMAGE"]},
            },
        )

    async def ask(self, question: str) -> str:
        self.ensure_configured()
        response = await self.send(self.build_ask_call(question))
        if not response.is_success:
            raise self.upstream_failure(response, "Gemini API Error", status_code=500)
        return extract_answer(self.parse_json(response))

    async def generate(self, prompt: str) -> Any:
        self.ensure_configured()
        response = await self.send(self.build_generate_call(prompt))
        if not response.is_success:
            if response.status_code == 403:
                raise self.upstream_failure(response, PERMISSION_DENIED)
            if response.status_code == 429:
                raise self.upstream_failure(response, RATE_LIMITED)
            raise self.upstream_failure(response, "Gemini Image API Error")
        return self.parse_json(response)
