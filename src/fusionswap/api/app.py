"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fusionswap.config import ConfigurationError, get_settings
from fusionswap.sdk.errors import FusionSDKError
from fusionswap.web.services.fusion_service import FusionServiceError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report bad or missing body fields as HTTP 400 using their wire names."""
    fields = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        name = ".".join(loc) or "body"
        if name not in fields:
            fields.append(name)
    return _error_response(400, "Missing required parameters: " + ", ".join(fields))


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error(f"Configuration error: {exc}")
    return _error_response(500, str(exc))


async def fusion_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Fusion+ error on {request.url.path}: {exc}")
    return _error_response(500, str(exc))


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Fusionswap API",
        description="Cross-chain swap backend for 1inch Fusion+",
        version="0.1.0",
        debug=settings.debug,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
    app.add_exception_handler(FusionServiceError, fusion_error_handler)
    app.add_exception_handler(FusionSDKError, fusion_error_handler)

    # Register routes
    from fusionswap.api.routes import health
    from fusionswap.web.controllers import fusion

    app.include_router(health.router, tags=["Health"])
    app.include_router(fusion.router)

    return app
