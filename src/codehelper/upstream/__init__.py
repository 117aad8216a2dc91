"""
Clients for the external services the proxy forwards to.

Each client wraps one upstream: it builds the single outbound call for a
validated request, sends it on the application's shared HTTP client and
maps the reply or failure.  New upstreams are added by subclassing
``UpstreamClient`` from ``base.py``.
"""

from .base import UpstreamCall, UpstreamClient
from .gemini import GeminiClient
from .jdoodle import JDoodleClient
from .ollama import OllamaClient

__all__ = [
    "UpstreamCall",
    "UpstreamClient",
    "GeminiClient",
    "JDoodleClient",
    "OllamaClient",
]
