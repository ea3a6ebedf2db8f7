"""
Main FastAPI application
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contract_explainer.core.config import Settings, settings as default_settings
from contract_explainer.core.dependencies import ServiceContainer, build_services
from contract_explainer.api.v1.router import api_router

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_app(
    settings: Optional[Settings] = None,
    services: Optional[ServiceContainer] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration (defaults to environment-loaded settings)
        services: Prebuilt services; built from settings at startup when omitted
    """
    settings = settings or default_settings
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Plain-language contract risk analysis",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.services = services

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    app.include_router(api_router)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Invalid request to {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Requisição inválida."})

    @app.on_event("startup")
    async def startup_event():
        """Startup event handler"""
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
        if app.state.services is None:
            app.state.services = build_services(settings)
        logger.info(f"OCR engine: {settings.OCR_ENGINE}")
        logger.info(f"Payment service configured: {app.state.services.payment_service.is_configured()}")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Shutdown event handler"""
        logger.info(f"Shutting down {settings.APP_NAME}")

    return app


app = create_app()
