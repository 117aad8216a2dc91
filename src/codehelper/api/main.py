"""
FastAPI application for the code helper proxy.

This module configures logging, builds the application from a
:class:`~codehelper.config.Config`, registers the proxy routes and the
front-end fallback, and renders every :class:`~codehelper.errors.ProxyError`
as a JSON error object.  Each proxy route validates its body, makes one
call through an upstream client and returns the mapped reply.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import Config
from ..errors import ErrorResponse, ProxyError
from ..models import (
    AnswerResponse,
    AskQuestionRequest,
    GenerateRequest,
    LocalModelRequest,
    ProxyRequest,
    RunCodeRequest,
)
from ..upstream import GeminiClient, JDoodleClient, OllamaClient


logger = logging.getLogger("codehelper")

if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("[codehelper] %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

logger.setLevel(logging.INFO)

# httpx logs full request URLs at INFO, and the Gemini key is a query parameter.
logging.getLogger("httpx").setLevel(logging.WARNING)


ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}

router = APIRouter()


def get_jdoodle(request: Request) -> JDoodleClient:
    return request.app.state.jdoodle


def get_gemini(request: Request) -> GeminiClient:
    return request.app.state.gemini


def get_ollama(request: Request) -> OllamaClient:
    return request.app.state.ollama


def require(req: ProxyRequest, request: Request) -> str:
    """Return the payload's required field or reject the request with 400."""
    try:
        return req.required_value()
    except ProxyError as exc:
        logger.warning("[%s] Rejected request: %s", request.url.path, exc.error)
        raise


@router.get("/health")
async def health() -> Dict[str, str]:
    """Return a simple health check response."""
    return {"status": "ok"}


@router.post("/run-code", responses=ERROR_RESPONSES)
@router.post("/run-java", include_in_schema=False)
async def run_code(
    req: RunCodeRequest,
    request: Request,
    jdoodle: JDoodleClient = Depends(get_jdoodle),
) -> JSONResponse:
    """Execute code on JDoodle and relay its reply verbatim."""
    code = require(req, request)
    return JSONResponse(content=await jdoodle.execute(code))


@router.post("/ask-llm", response_model=AnswerResponse, responses=ERROR_RESPONSES)
@router.post("/ask-gemini", response_model=AnswerResponse, include_in_schema=False)
async def ask_llm(
    req: AskQuestionRequest,
    request: Request,
    gemini: GeminiClient = Depends(get_gemini),
) -> AnswerResponse:
    """Ask Gemini a single question and return the first answer's text."""
    question = require(req, request)
    return AnswerResponse(answer=await gemini.ask(question))


@router.post(
    "/api/generate",
    responses={**ERROR_RESPONSES, 403: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
)
async def generate(
    req: GenerateRequest,
    request: Request,
    gemini: GeminiClient = Depends(get_gemini),
) -> JSONResponse:
    """Generate text and images with Gemini and relay the reply verbatim."""
    prompt = require(req, request)
    return JSONResponse(content=await gemini.generate(prompt))


@router.post("/ask-local-model", response_model=AnswerResponse, responses=ERROR_RESPONSES)
@router.post("/ask-ollama", response_model=AnswerResponse, include_in_schema=False)
async def ask_local_model(
    req: LocalModelRequest,
    request: Request,
    ollama: OllamaClient = Depends(get_ollama),
) -> AnswerResponse:
    """Send a prompt to the local model server."""
    prompt = require(req, request)
    return AnswerResponse(answer=await ollama.generate(prompt, req.model))


@router.get("/{full_path:path}", include_in_schema=False, response_model=None)
async def serve_frontend(full_path: str, request: Request) -> FileResponse | JSONResponse:
    """Serve a static asset, or ``index.html`` for client-side routes."""
    static_dir = Path(request.app.state.config.static_dir).resolve()
    if full_path:
        candidate = (static_dir / full_path).resolve()
        if candidate.is_relative_to(static_dir) and candidate.is_file():
            return FileResponse(candidate)
    index_path = static_dir / "index.html"
    if index_path.is_file():
        return FileResponse(index_path, media_type="text/html")
    logger.warning("Front-end requested but %s does not exist", index_path)
    return ProxyError(404, "Front-end not found").to_response()


async def handle_proxy_error(request: Request, exc: ProxyError) -> JSONResponse:
    return exc.to_response()


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning("[%s] %s %s", request.url.path, exc.status_code, exc.detail)
    response = ProxyError(exc.status_code, str(exc.detail)).to_response()
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    logger.warning("[%s] Invalid request body: %s", request.url.path, details)
    return ProxyError(400, "Invalid request body", details).to_response()


async def log_requests(request: Request, call_next):
    """Middleware logging each request and the status it was answered with."""
    path = request.url.path
    method = request.method
    client = getattr(request.client, "host", "unknown")

    logger.info("Incoming request: %s %s from %s", method, path, client)
    response = await call_next(request)
    logger.info("Response: %s %s -> %s", method, path, response.status_code)
    return response


def create_app(
    config: Optional[Config] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """Build the application.

    Parameters
    ----------
    config: Config, optional
        Configuration to use.  Loaded from the environment when omitted.
    http_client: httpx.AsyncClient, optional
        Client used for every upstream call.  When omitted one is created
        with the configured timeout and closed on shutdown; a client passed
        in is left open for its owner to close.
    """
    if config is None:
        config = Config.from_env()

    logger.info(
        "Loaded config: jdoodle_language=%s, gemini_models=%s/%s, ollama_host=%s, static_dir=%s",
        config.jdoodle_language,
        config.gemini_text_model,
        config.gemini_image_model,
        config.ollama_host,
        config.static_dir,
    )
    for name in config.missing_upstreams():
        logger.error("Missing credentials for %s; its routes will answer 503", name)

    owns_client = http_client is None
    if http_client is None:
        http_client = httpx.AsyncClient(timeout=config.upstream_timeout)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_client:
            await http_client.aclose()

    app = FastAPI(title="Code Helper Proxy", version="0.1.0", lifespan=lifespan)
    app.state.config = config
    app.state.jdoodle = JDoodleClient(http_client, config)
    app.state.gemini = GeminiClient(http_client, config)
    app.state.ollama = OllamaClient(http_client, config)

    app.add_exception_handler(ProxyError, handle_proxy_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.middleware("http")(log_requests)
    app.include_router(router)
    return app


app = create_app()
