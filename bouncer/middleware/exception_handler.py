"""Exception handlers rendering bouncer errors."""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from bouncer.utils.exceptions import AuthorizationError, BouncerException

logger = logging.getLogger(__name__)


def wants_plain_text(request: Request) -> bool:
    """Check if the client accepts HTML or plain text but not JSON."""
    accept = request.headers.get("accept", "").lower()
    if "json" in accept:
        return False
    return "text/html" in accept or "text/plain" in accept


class ExceptionHandlers:
    """Exception handlers registered by ``register_bouncer``."""

    @staticmethod
    async def authorization_error_handler(request: Request, exc: AuthorizationError) -> Response:
        """Render a denied authorization with the verdict's message and status."""

        logger.warning(
            f"Authorization denied in {request.method} {request.url}: {exc.message}",
            extra={
                "error_code": exc.error_code,
                "status_code": exc.status,
                "details": exc.details,
                "path": str(request.url.path),
                "method": request.method,
            },
        )

        if wants_plain_text(request):
            return PlainTextResponse(exc.message, status_code=exc.status)

        return JSONResponse(
            status_code=exc.status,
            content={
                "success": False,
                "message": exc.message,
                "error_code": exc.error_code,
                "details": exc.details,
            },
        )

    @staticmethod
    async def bouncer_exception_handler(request: Request, exc: BouncerException) -> JSONResponse:
        """Handle bouncer misconfiguration (unknown actions, policies and the like)."""

        logger.error(
            f"Bouncer error in {request.method} {request.url}: {exc.message}",
            extra={
                "error_code": exc.error_code,
                "details": exc.details,
                "path": str(request.url.path),
                "method": request.method,
                "exception_type": type(exc).__name__,
            },
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": exc.message,
                "error_code": exc.error_code,
                "details": exc.details,
            },
        )


def register_exception_handlers(app: Any) -> None:
    """Register bouncer exception handlers with the FastAPI app."""

    handlers = ExceptionHandlers()

    app.add_exception_handler(AuthorizationError, handlers.authorization_error_handler)
    app.add_exception_handler(BouncerException, handlers.bouncer_exception_handler)
