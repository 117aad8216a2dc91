"""Pydantic models for request and response bodies.

Each proxy route accepts one request model.  The field named by
``required_field`` must be present and non-empty; everything else is
optional.  The presence check is done by :meth:`ProxyRequest.required_value`
rather than by pydantic so that a missing field yields the route's own
400 message instead of a generic validation error.
"""

from __future__ import annotations

from typing import ClassVar, Optional

from pydantic import BaseModel, Field

from .errors import ProxyError


class ProxyRequest(BaseModel):
    """Base class for proxy route payloads."""

    required_field: ClassVar[str]
    missing_message: ClassVar[str]

    def required_value(self) -> str:
        """Return the required field, raising a 400 error when it is empty."""
        value = getattr(self, self.required_field)
        if not value:
            raise ProxyError(400, self.missing_message)
        return value


class RunCodeRequest(ProxyRequest):
    """Request body for ``/run-code``."""

    required_field: ClassVar[str] = "code"
    missing_message: ClassVar[str] = "No code provided"

    code: Optional[str] = Field(default=None, description="Source code to execute.")


class AskQuestionRequest(ProxyRequest):
    """Request body for ``/ask-llm``."""

    required_field: ClassVar[str] = "question"
    missing_message: ClassVar[str] = "No question provided"

    question: Optional[str] = Field(default=None, description="Question for the language model.")


class GenerateRequest(ProxyRequest):
    """Request body for ``/api/generate``."""

    required_field: ClassVar[str] = "prompt"
    missing_message: ClassVar[str] = "No prompt provided"

    prompt: Optional[str] = Field(default=None, description="Text prompt for text+image generation.")


class LocalModelRequest(ProxyRequest):
    """Request body for ``/ask-local-model``."""

    required_field: ClassVar[str] = "prompt"
    missing_message: ClassVar[str] = "No prompt provided"

    prompt: Optional[str] = None
    model: Optional[str] = Field(
        default=None,
        description="Model served by the local server. Uses the configured default if omitted.",
    )


class AnswerResponse(BaseModel):
    """Response body for the question-answering routes."""

    answer: Optional[str] = None
