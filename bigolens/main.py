"""
FastAPI application for BigO Lens.
"""
from __future__ import annotations

import math
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bigolens import __version__
from bigolens.config import Settings, get_settings, logger
from bigolens.core.analyzer import CodeComplexityAnalyzer
from bigolens.models import (
    AnalysisRecord,
    AnalysisResult,
    AnalyzeRequest,
    ConnectionResponse,
    ErrorResponse,
)
from bigolens.providers.gemini_provider import GeminiProvider, ProviderError, ProviderErrorKind
from bigolens.rate_gate import CooldownGate
from bigolens.storage import MemStorage


MISSING_KEY_MESSAGE = (
    "Gemini API key not configured. Please set GEMINI_API_KEY or GOOGLE_API_KEY environment variable."
)


# ---------------------------------------------------------------------------
# Dependency helpers
# ---------------------------------------------------------------------------


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_analyzer(request: Request) -> CodeComplexityAnalyzer:
    return request.app.state.analyzer


def get_storage(request: Request) -> MemStorage:
    return request.app.state.storage


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------


async def security_headers_middleware(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


async def request_size_middleware(request: Request, call_next):
    if request.method in ("POST", "PUT", "PATCH"):
        max_size = request.app.state.settings.MAX_REQUEST_SIZE
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > max_size:
            return JSONResponse(
                status_code=413,
                content={"message": f"Request body exceeds {max_size} bytes"},
            )
    return await call_next(request)


async def rate_gate_middleware(request: Request, call_next):
    """Process-wide cooldown on POST /api/analyze, checked before anything else."""
    if request.method != "POST" or request.url.path != "/api/analyze":
        return await call_next(request)

    gate: CooldownGate = request.app.state.rate_gate
    if not gate.try_acquire():
        retry_after = max(1, math.ceil(gate.retry_after()))
        logger.warning("Analyze request rejected by cooldown (retry in %ds)", retry_after)
        return JSONResponse(
            status_code=429,
            content={"message": "Please wait a few seconds before analyzing again."},
            headers={"Retry-After": str(retry_after)},
        )
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------


analysis_router = APIRouter()


@analysis_router.post(
    "/analyze",
    response_model=AnalysisResult,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def analyze_code(body: AnalyzeRequest, request: Request):
    """
    Analyze code complexity.

    Identical code is answered from the store without calling Gemini again.
    """
    settings = get_app_settings(request)
    if not settings.api_key_configured:
        raise HTTPException(status_code=400, detail=MISSING_KEY_MESSAGE)

    request_id = datetime.now().strftime("%Y%m%d-%H%M%S-%f")
    start_time = time.time()
    logger.info("[%s] Analyze request - %s, %d chars", request_id, body.language, len(body.code))

    try:
        record = await get_analyzer(request).analyze(body.code, body.language)
    except ProviderError as exc:
        logger.error("[%s] Provider error after %.3fs: %s", request_id, time.time() - start_time, exc)
        if exc.kind is ProviderErrorKind.QUOTA:
            raise HTTPException(
                status_code=429,
                detail="API quota exceeded or rate limit hit. Please try again later.",
            )
        if exc.kind is ProviderErrorKind.UNAUTHORIZED:
            raise HTTPException(
                status_code=400,
                detail="Invalid or missing Gemini API key. Please check your API key configuration.",
            )
        raise HTTPException(
            status_code=500,
            detail="Failed to analyze code. Please check your code and try again.",
        )
    except Exception as exc:
        logger.error("[%s] Analysis error after %.3fs: %s", request_id, time.time() - start_time, exc)
        raise HTTPException(
            status_code=500,
            detail="Failed to analyze code. Please check your code and try again.",
        )

    logger.info("[%s] Analyze completed in %.3fs", request_id, time.time() - start_time)
    return record.to_result()


@analysis_router.get("/analyses", response_model=list[AnalysisRecord])
async def list_analyses(request: Request, limit: int = Query(default=10, ge=0)):
    """Most recent analyses, newest first."""
    limit = min(limit, get_app_settings(request).RECENT_ANALYSES_LIMIT)
    try:
        return await get_storage(request).list_recent(limit)
    except Exception as exc:
        logger.error("Error fetching analyses: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to fetch analyses")


@analysis_router.get(
    "/analyses/{analysis_id}",
    response_model=AnalysisRecord,
    responses={404: {"model": ErrorResponse}},
)
async def get_analysis(analysis_id: int, request: Request):
    try:
        record = await get_storage(request).get(analysis_id)
    except Exception as exc:
        logger.error("Error fetching analysis #%d: %s", analysis_id, exc)
        raise HTTPException(status_code=500, detail="Failed to fetch analysis")
    if record is None:
        raise HTTPException(status_code=404, detail=f"Analysis {analysis_id} not found")
    return record


@analysis_router.post(
    "/test-connection",
    response_model=ConnectionResponse,
    responses={400: {"model": ConnectionResponse}},
)
async def test_connection(request: Request):
    """Check that the configured key can reach Gemini."""
    if not get_app_settings(request).api_key_configured:
        return JSONResponse(
            status_code=400,
            content={"message": "Gemini API key not configured", "connected": False},
        )

    provider: GeminiProvider = request.app.state.provider
    try:
        await provider.ping()
    except Exception as exc:
        logger.error("Connection test error: %s", exc)
        return JSONResponse(
            status_code=400,
            content={"message": "API connection failed. Please check your API key.", "connected": False},
        )

    return ConnectionResponse(message="API connection successful", connected=True)


health_router = APIRouter()


@health_router.get("/health")
async def health(request: Request):
    """Health check endpoint."""
    settings = get_app_settings(request)
    return {
        "status": "ok" if settings.api_key_configured else "unconfigured",
        "model": settings.GEMINI_MODEL,
        "analyses": len(get_storage(request)),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report field names and messages only, never submitted values."""
    problems = []
    for err in exc.errors()[:5]:
        loc = err.get("loc") or ()
        field = loc[-1] if len(loc) > 1 and isinstance(loc[-1], str) else "body"
        message = str(err.get("msg", "Invalid value")).removeprefix("Value error, ")
        problems.append(f"{field}: {message}")
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, problems)
    return JSONResponse(status_code=400, content={"message": "; ".join(problems) or "Invalid request"})


async def global_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception on %s %s: %s: %s",
        request.method,
        request.url.path,
        type(exc).__name__,
        str(exc)[:200],
    )
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# ---------------------------------------------------------------------------
# FastAPI app assembly
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    settings: Settings = app.state.settings
    logger.info("BigO Lens v%s starting", __version__)
    logger.info("Model: %s", settings.GEMINI_MODEL)
    logger.info("Analyze cooldown: %dms", settings.ANALYZE_COOLDOWN_MS)

    if not settings.api_key_configured:
        logger.error("Gemini API key missing - /api/analyze will answer 400")
    else:
        logger.info("Gemini provider ready")

    yield

    logger.info("Shutting down (%d analyses in memory)", len(app.state.storage))


def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[GeminiProvider] = None,
    storage: Optional[MemStorage] = None,
) -> FastAPI:
    """
    Build an application with its own store, rate gate and provider.

    Args:
        settings: Defaults to the cached environment settings
        provider: Anything with ``generate`` and ``ping``; defaults to Gemini
        storage: Defaults to a fresh MemStorage
    """
    if settings is None:
        settings = get_settings()
    if provider is None:
        provider = GeminiProvider(settings)
    if storage is None:
        storage = MemStorage()

    app = FastAPI(
        title="BigO Lens API",
        description="AI-powered time and space complexity analysis using Gemini",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.state.settings = settings
    app.state.provider = provider
    app.state.storage = storage
    app.state.analyzer = CodeComplexityAnalyzer(provider, storage)
    app.state.rate_gate = CooldownGate(settings.cooldown_seconds)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.middleware("http")(security_headers_middleware)
    app.middleware("http")(request_size_middleware)
    app.middleware("http")(rate_gate_middleware)

    cors_origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Retry-After"],
    )

    @app.get("/")
    async def root():
        return {
            "name": "BigO Lens API",
            "version": __version__,
            "model": settings.GEMINI_MODEL,
            "status": "ok" if settings.api_key_configured else "unconfigured",
        }

    app.include_router(analysis_router, prefix="/api", tags=["analysis"])
    app.include_router(health_router, tags=["health"])

    return app


app = create_app()
