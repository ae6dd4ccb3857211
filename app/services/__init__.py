"""
Business logic services for the Fabric Asset Gateway.
Services handle ledger operations separate from API endpoints.
"""

from app.services.asset_service import AssetService
from app.services.metrics import MetricsCollector, MetricsMiddleware, get_metrics_collector

__all__ = [
    "AssetService",
    "MetricsCollector",
    "MetricsMiddleware",
    "get_metrics_collector",
]
