"""Global exception handlers mapping domain errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.exceptions import CampusCrushError

logger = logging.getLogger("app")


def register_error_handlers(app: FastAPI) -> None:
    """Register the domain error handler on the FastAPI app."""

    @app.exception_handler(CampusCrushError)
    async def campus_crush_error_handler(request: Request, exc: CampusCrushError):
        logger.warning(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.http_status,
            content={"detail": exc.message, "code": exc.code},
        )
