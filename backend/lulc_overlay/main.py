"""FastAPI app factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lulc_overlay import __version__
from lulc_overlay.config import settings
from lulc_overlay.errors import BadRequest, OverlayError
from lulc_overlay.models.responses import ErrorResponse

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    async with httpx.AsyncClient(timeout=settings.http_timeout, follow_redirects=True) as client:
        app.state.http_client = client
        yield


async def _overlay_error_handler(request: Request, exc: OverlayError) -> JSONResponse:
    if isinstance(exc, BadRequest):
        body = ErrorResponse(error=exc.error)
    else:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
        body = ErrorResponse(error=exc.error, details=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    body = ErrorResponse(error="Server error", details=str(exc))
    return JSONResponse(status_code=500, content=body.model_dump())


def create_app() -> FastAPI:
    app = FastAPI(
        title="GIS Sentinel Overlay API",
        description="Sentinel land-cover rasters masked to Indian state and village boundaries",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Bounds"],
    )

    app.add_exception_handler(OverlayError, _overlay_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    from lulc_overlay.api.router import api_router, root_router

    app.include_router(api_router)
    app.include_router(root_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
