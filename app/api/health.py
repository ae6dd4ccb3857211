"""
Health and metrics endpoints.
No caller identity required.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.dependencies import AppSettings, Ledger, Organizations
from app.services.metrics import get_metrics_collector

router = APIRouter()


@router.get("/health")
async def health_check(ledger: Ledger, organizations: Organizations, settings: AppSettings):
    """
    Service health check endpoint.

    Reports the configured ledger backend and known organizations. The
    ledger network itself is not contacted.
    """
    response = {
        "status": "ok",
        "ledgerBackend": ledger.name,
        "channel": settings.CHANNEL_NAME,
        "chaincode": settings.CHAINCODE_NAME,
        "organizations": organizations.names,
    }

    if not len(organizations):
        response["status"] = "degraded"
        response["issues"] = ["No organizations configured"]

    return response


@router.get("/metrics")
async def metrics():
    """Request counts, response times, error rates and ledger error kinds."""
    return get_metrics_collector().get_metrics()


@router.get("/metrics/prometheus", response_class=PlainTextResponse)
async def metrics_prometheus():
    """
    Prometheus text exposition format endpoint.
    Compatible with Prometheus scraping.
    """
    return PlainTextResponse(
        content=get_metrics_collector().to_prometheus(),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
