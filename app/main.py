"""
Fabric Asset Gateway - Main Application Entry Point.

REST front end that forwards asset operations to chaincode on a
Hyperledger Fabric network, using a per-request organization and user
identity.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import get_settings
from app.core.exceptions import GatewayAPIException, ValidationException
from app.core.organizations import get_organizations
from app.api.router import api_router
from app.ledger import get_ledger_backend
from app.services.metrics import MetricsMiddleware, get_metrics_collector

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.PROJECT_NAME}")
    logger.info(f"Ledger backend: {settings.LEDGER_BACKEND}")
    logger.info(f"Channel/chaincode: {settings.CHANNEL_NAME}/{settings.CHAINCODE_NAME}")
    logger.info(f"Organizations: {', '.join(get_organizations().names) or '(none)'}")

    yield

    # Shutdown
    await get_ledger_backend().close()
    logger.info(f"Shutting down {settings.PROJECT_NAME}")


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
## Fabric Asset Gateway

REST endpoints for assets held on a Hyperledger Fabric ledger.

Every request names the calling organization (`orgName`) and enrolled user
(`userName`). The gateway maps the organization to its MSP, loads the user's
credential from the organization's wallet and invokes one chaincode
transaction:

- reads (`ReadAsset`, `GetAssetHistory`) are evaluated on a peer
- writes (`CreateAsset`, `UpdateAsset`, `TransferAsset`, `DeleteAsset`) are submitted
    """,
    version=__version__,
    openapi_tags=[
        {"name": "assets", "description": "Asset chaincode operations"},
        {"name": "health", "description": "Service health checks"},
    ],
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(MetricsMiddleware)


@app.exception_handler(GatewayAPIException)
async def gateway_exception_handler(request: Request, exc: GatewayAPIException) -> JSONResponse:
    """
    Global exception handler for gateway exceptions.
    Server errors are logged; the body carries the error kind and message.
    """
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed [{exc.error}]: {exc.message}")
        get_metrics_collector().record_ledger_error(exc.error)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or empty required fields are reported as 400."""
    error = ValidationException()
    content = error.to_dict()
    content["details"] = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=error.status_code, content=content)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all exception handler for unexpected errors.
    Logs the full error and returns its string form.
    """
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": str(exc),
        },
    )


# Include API routers
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/", include_in_schema=False)
async def root():
    """Service information."""
    return {
        "name": settings.PROJECT_NAME,
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
        "ledgerBackend": settings.LEDGER_BACKEND,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
