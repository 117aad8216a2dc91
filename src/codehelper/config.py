"""Configuration loader.

The proxy reads its configuration from environment variables, after
loading a ``.env`` file found in or above the working directory, so that the
same code runs on a developer laptop (with a local Ollama daemon) and in a
hosted deployment.  Reasonable defaults are provided for everything except
the upstream credentials.

Environment variables:

``JDOODLE_CLIENT_ID`` / ``JDOODLE_CLIENT_SECRET``
    Credentials for the JDoodle code execution API.  Both are required for
    the ``/run-code`` route.

``JDOODLE_URL``
    Execute endpoint.  Defaults to ``https://api.jdoodle.com/v1/execute``.

``JDOODLE_LANGUAGE`` / ``JDOODLE_VERSION_INDEX``
    Target language and pinned compiler version sent with every execution.
    Default to ``java`` and ``4``.

``GEMINI_API_KEY``
    API key for the Gemini generative language API.  Required for the
    ``/ask-llm`` and ``/api/generate`` routes.

``GEMINI_BASE_URL``
    Defaults to ``https://generativelanguage.googleapis.com/v1beta``.

``GEMINI_TEXT_MODEL`` / ``GEMINI_IMAGE_MODEL``
    Models used for single-turn questions and for text+image generation.

``OLLAMA_HOST`` / ``OLLAMA_DEFAULT_MODEL``
    Local model server and the model used when a request names none.
    Default to ``http://127.0.0.1:11434`` and ``phi3``.

``STATIC_DIR``
    Directory holding the front-end build.  Defaults to ``public``.

``UPSTREAM_TIMEOUT_SECONDS``
    Timeout in seconds handed to the outbound HTTP client.  Unset means
    upstream calls wait for as long as the upstream takes.

``CODEHELPER_REQUIRE_CREDENTIALS``
    If ``true``, missing upstream credentials abort startup instead of only
    disabling the affected routes.  Defaults to ``false``.

``HOST`` / ``PORT``
    Listen address for ``python -m codehelper.api``.  Default to
    ``0.0.0.0`` and 3000.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

JDOODLE = "JDoodle"
GEMINI = "Gemini"


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "y"}


@dataclass(frozen=True)
class Config:
    """Centralised, read-only configuration object."""

    jdoodle_client_id: str = ""
    jdoodle_client_secret: str = ""
    jdoodle_url: str = "https://api.jdoodle.com/v1/execute"
    jdoodle_language: str = "java"
    jdoodle_version_index: str = "4"
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_text_model: str = "gemini-pro"
    gemini_image_model: str = "gemini-2.5-flash-image-preview"
    ollama_host: str = "http://127.0.0.1:11434"
    ollama_default_model: str = "phi3"
    static_dir: str = "public"
    upstream_timeout: Optional[float] = None
    require_credentials: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    def __post_init__(self) -> None:
        if self.require_credentials and self.missing_upstreams():
            raise RuntimeError(
                "Missing credentials for: " + ", ".join(self.missing_upstreams())
            )

    @property
    def jdoodle_configured(self) -> bool:
        return bool(self.jdoodle_client_id and self.jdoodle_client_secret)

    @property
    def gemini_configured(self) -> bool:
        return bool(self.gemini_api_key)

    def missing_upstreams(self) -> List[str]:
        """Names of the upstreams whose credentials are not set."""
        missing = []
        if not self.jdoodle_configured:
            missing.append(JDOODLE)
        if not self.gemini_configured:
            missing.append(GEMINI)
        return missing

    @classmethod
    def load(cls) -> "Config":
        load_dotenv(find_dotenv(".env", usecwd=True))

        def _int_var(name: str, default: int) -> int:
            val = os.getenv(name)
            if val is None:
                return default
            try:
                return int(val)
            except ValueError:
                raise ValueError(f"Invalid integer for {name}: {val}")

        def _float_var(name: str, default: Optional[float]) -> Optional[float]:
            val = os.getenv(name)
            if val is None:
                return default
            try:
                return float(val)
            except ValueError:
                raise ValueError(f"Invalid number for {name}: {val}")

        defaults = cls.__dataclass_fields__

        def _str_var(name: str, field: str) -> str:
            return os.getenv(name, defaults[field].default).strip()

        return cls(
            jdoodle_client_id=_str_var("JDOODLE_CLIENT_ID", "jdoodle_client_id"),
            jdoodle_client_secret=_str_var("JDOODLE_CLIENT_SECRET", "jdoodle_client_secret"),
            jdoodle_url=_str_var("JDOODLE_URL", "jdoodle_url"),
            jdoodle_language=_str_var("JDOODLE_LANGUAGE", "jdoodle_language"),
            jdoodle_version_index=_str_var("JDOODLE_VERSION_INDEX", "jdoodle_version_index"),
            gemini_api_key=_str_var("GEMINI_API_KEY", "gemini_api_key"),
            gemini_base_url=_str_var("GEMINI_BASE_URL", "gemini_base_url").rstrip("/"),
            gemini_text_model=_str_var("GEMINI_TEXT_MODEL", "gemini_text_model"),
            gemini_image_model=_str_var("GEMINI_IMAGE_MODEL", "gemini_image_model"),
            ollama_host=_str_var("OLLAMA_HOST", "ollama_host").rstrip("/"),
            ollama_default_model=_str_var("OLLAMA_DEFAULT_MODEL", "ollama_default_model"),
            static_dir=_str_var("STATIC_DIR", "static_dir"),
            upstream_timeout=_float_var("UPSTREAM_TIMEOUT_SECONDS", None),
            require_credentials=_parse_bool(os.getenv("CODEHELPER_REQUIRE_CREDENTIALS"), False),
            host=_str_var("HOST", "host"),
            port=_int_var("PORT", 3000),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """
        Alternate constructor used by the API to load configuration.

        This wrapper calls :meth:`load` to construct the configuration.
        It exists to provide a more intuitive name when consumed in
        application code.
        """
        return cls.load()
