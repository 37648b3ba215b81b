"""MediaGo Player — FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mediago_player.config import Settings, settings as default_settings
from mediago_player.errors import ConfigError, MediaError
from mediago_player.middleware import install_middleware
from mediago_player.routers import health, spa, videos
from mediago_player.services.assets import SPAChain, build_default_chain
from mediago_player.services.video import VideoService

logger = logging.getLogger(__name__)

# Paths the SPAs must never answer for.
EXCLUDE_PREFIXES = ("/api/", "/healthy", "/docs", "/videos/")


def _video_service(cfg: Settings) -> Optional[VideoService]:
    if not cfg.video_enabled:
        logger.info("No video root configured; video listing returns an empty list")
        return None
    try:
        service = VideoService(cfg.video_root_path, cfg.http_addr, strict_paths=cfg.strict_paths)
    except ConfigError as e:
        logger.warning("Failed to initialize video service: %s", e)
        return None
    logger.info(
        "Serving videos from %s (http://%s:%s)",
        service.video_dir, service.server_ip, service.port,
    )
    return service


def create_app(cfg: Optional[Settings] = None, spa_chain: Optional[SPAChain] = None) -> FastAPI:
    cfg = cfg or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("MediaGo Player starting (mode=%s, addr=%s)", cfg.app_mode, cfg.http_addr)
        yield
        logger.info("MediaGo Player shutting down")

    app = FastAPI(
        title="MediaGo Player",
        description="MediaGo Player backend API for managing and streaming video files",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if cfg.docs_enabled else None,
        redoc_url=None,
        openapi_url="/docs/openapi.json" if cfg.docs_enabled else None,
    )
    if cfg.docs_enabled:
        logger.info("API documentation enabled at /docs")

    install_middleware(app)

    app.state.settings = cfg
    app.state.video_service = _video_service(cfg)
    if spa_chain is None:
        spa_chain = build_default_chain(cfg.ui_dir, EXCLUDE_PREFIXES)
    app.state.spa_chain = spa_chain

    @app.exception_handler(MediaError)
    async def media_error_handler(request: Request, exc: MediaError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    app.include_router(health.router)
    app.include_router(videos.router, prefix="/api/v1")
    if app.state.video_service is not None:
        app.include_router(videos.stream_router)

    # Must be last: it claims every path the routes above did not.
    app.include_router(spa.router)

    return app


app = create_app()
