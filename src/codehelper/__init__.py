"""Code helper proxy package.

This package exposes a small HTTP backend for a learning front-end.  It
forwards code to the JDoodle execution API, questions and generation
prompts to Google's Gemini API, and prompts to a locally running Ollama
server, relaying each reply to the browser.

The top‑level modules include:

* ``config`` – configuration handling for environment variables.
* ``models`` – Pydantic models defining request and response schemas.
* ``errors`` – the error type rendered as ``{"error", "details"}`` replies.
* ``upstream`` – one client per external service.
* ``api`` – FastAPI application exposing HTTP endpoints.
"""
