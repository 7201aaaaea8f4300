"""
Blog API Backend - FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       with its own seeded post store and services.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │ Req ID   │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌───────────────────────────────┐ │
    │  │ POST /login  │ │ GET/POST /posts               │ │
    │  │              │ │ GET/PUT/DELETE /posts/{id}    │ │
    │  └──────────────┘ └───────────────────────────────┘ │
    │                                                     │
    │  Exception Handlers → {"message", "statusCode"}     │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import Settings, settings
from app.exceptions import BlogAPIError, InternalError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import auth, posts
from app.schemas.post import ErrorResponse
from app.services.auth_service import AuthService
from app.services.post_service import PostService
from app.store import InMemoryPostStore, PostStore, load_seed_posts

logger = logging.getLogger(__name__)

SERVICE_NAME = "Blog CRUD Backend Service"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_settings: Settings = app.state.settings

    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("%s starting up...", SERVICE_NAME)

    try:
        app_settings.validate_required_for_production()
    except ValueError as e:
        # Development defaults are allowed; warn loudly instead of exiting
        logger.warning("%s", str(e))

    logger.info("Posts in memory: %d", len(app.state.post_store.list_all()))
    logger.info(
        "Server running on http://%s:%d", app_settings.backend_host, app_settings.backend_port
    )
    logger.info("=" * 60)

    yield

    # In-memory posts are discarded here
    logger.info("%s shutting down...", SERVICE_NAME)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(status_code: int, message: str) -> JSONResponse:
    """Render the uniform {message, statusCode} error body."""
    body = ErrorResponse(message=message, status_code=status_code)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        BlogAPIError            → its own status_code (400/401/404/500)
        RequestValidationError  → 400 (malformed JSON, wrong field types)
        HTTPException 404/405   → 404 "Not Found - <url>" (unmatched route)
        HTTPException (other)   → its own status code
        Exception (fallback)    → 500 "Internal Server Error"

    Stack traces and exception context are logged server-side only.
    """

    @app.exception_handler(BlogAPIError)
    async def handle_api_error(request: Request, exc: BlogAPIError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        else:
            logger.warning("[%s] %s %s: %s", rid, request.method, request.url.path, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        if first.get("type") == "json_invalid":
            message = "Malformed JSON in request body"
        else:
            location = ".".join(str(part) for part in first.get("loc", ()))
            message = f"Invalid request: {location} {first.get('msg', '')}".strip()
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), message)
        return error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # 405 means the path exists but not for this method; still "no route"
        if exc.status_code in (404, 405):
            url = request.url.path
            if request.url.query:
                url = f"{url}?{request.url.query}"
            return error_response(404, f"Not Found - {url}")
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all: generic 500 body, full stack trace in the log.

        Runs outside the middleware chain, so the request ID header is set here.
        """
        rid = getattr(request.state, "request_id", None) or request_id_var.get("")
        error = InternalError(context={"error_type": type(exc).__name__})
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=exc)
        response = error_response(error.status_code, error.message)
        response.headers["X-Request-ID"] = rid
        return response


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[PostStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use (defaults to the module singleton).
        store:        Post store to serve. Defaults to a fresh in-memory store
                      loaded from the configured seed list.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app_settings = app_settings or settings
    if store is None:
        store = InMemoryPostStore(load_seed_posts(app_settings.seed_path))

    docs = app_settings.docs_enabled
    app = FastAPI(
        title="Blog API",
        description="Minimal blog post CRUD API with bearer-token authentication.",
        version=__version__,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
        # "/posts/" is an unmatched route (404), not a redirect to "/posts"
        redirect_slashes=False,
        lifespan=lifespan,
    )

    # ── Application State ─────────────────────────────────────────────────
    app.state.settings = app_settings
    app.state.post_store = store
    app.state.post_service = PostService(store)
    app.state.auth_service = AuthService.from_settings(app_settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added runs first)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(posts.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
