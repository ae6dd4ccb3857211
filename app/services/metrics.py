"""
In-process request metrics for the gateway.

Requests are grouped by method and route template; gateway failures are
also counted by error kind. Exposed as JSON and Prometheus text.
"""

import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.config import get_settings


@dataclass
class RouteStats:
    requests: int = 0
    errors: int = 0
    seconds: float = 0.0

    @property
    def avg_seconds(self) -> float:
        return self.seconds / self.requests if self.requests else 0.0


class MetricsCollector:
    """Counters keyed by (method, route template)."""

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], RouteStats] = defaultdict(RouteStats)
        self._status_counts: dict[int, int] = defaultdict(int)
        self._ledger_errors: dict[str, int] = defaultdict(int)
        self._start_time: float = time.time()

    def record_request(
        self,
        method: str,
        path: str,
        status_code: int,
        duration: float,
    ) -> None:
        """Record a completed request."""
        stats = self._routes[(method, path)]
        stats.requests += 1
        stats.seconds += duration
        if status_code >= 400:
            stats.errors += 1
        self._status_counts[status_code] += 1

    def record_ledger_error(self, kind: str) -> None:
        """Record a gateway error by kind."""
        self._ledger_errors[kind] += 1

    def get_metrics(self) -> dict[str, Any]:
        total_requests = sum(s.requests for s in self._routes.values())
        total_errors = sum(s.errors for s in self._routes.values())
        by_route = {f"{method} {path}": stats for (method, path), stats in sorted(self._routes.items())}

        return {
            "uptime_seconds": round(time.time() - self._start_time, 2),
            "total_requests": total_requests,
            "total_errors": total_errors,
            "error_rate": round(total_errors / total_requests, 4) if total_requests else 0,
            "requests_by_endpoint": {k: s.requests for k, s in by_route.items()},
            "errors_by_endpoint": {k: s.errors for k, s in by_route.items() if s.errors},
            "errors_by_kind": dict(self._ledger_errors),
            "status_code_counts": {str(k): v for k, v in sorted(self._status_counts.items())},
            "avg_response_time_ms": {k: round(s.avg_seconds * 1000, 2) for k, s in by_route.items()},
        }

    def to_prometheus(self) -> str:
        """Prometheus text exposition (format version 0.0.4)."""
        routes = sorted(self._routes.items())
        blocks = [
            _block(
                "gateway_uptime_seconds", "gauge", "Seconds since the gateway started",
                [("", f"{time.time() - self._start_time:.2f}")],
            ),
            _block(
                "gateway_http_requests_total", "counter", "HTTP requests by route",
                [(_route_labels(key), str(s.requests)) for key, s in routes],
            ),
            _block(
                "gateway_http_errors_total", "counter", "HTTP 4xx/5xx responses by route",
                [(_route_labels(key), str(s.errors)) for key, s in routes if s.errors],
            ),
            _block(
                "gateway_ledger_errors_total", "counter", "Gateway errors by kind",
                [(f'{{kind="{kind}"}}', str(n)) for kind, n in sorted(self._ledger_errors.items())],
            ),
            _block(
                "gateway_http_response_time_seconds", "gauge", "Mean response time by route",
                [(_route_labels(key), f"{s.avg_seconds:.6f}") for key, s in routes],
            ),
        ]
        return "\n".join(blocks)


def _route_labels(key: tuple[str, str]) -> str:
    method, path = key
    return f'{{method="{method}",path="{path}"}}'


def _block(name: str, kind: str, help_text: str, samples: list[tuple[str, str]]) -> str:
    lines = [f"# HELP {name} {help_text}", f"# TYPE {name} {kind}"]
    lines.extend(f"{name}{labels} {value}" for labels, value in samples)
    return "\n".join(lines) + "\n"


_metrics_collector: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Get or create the global metrics collector."""
    global _metrics_collector
    if _metrics_collector is None:
        _metrics_collector = MetricsCollector()
    return _metrics_collector


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Records every request under its route template (e.g. /asset/{asset_id}).
    The metrics endpoints themselves are not recorded.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.time()
        response = await call_next(request)
        duration = time.time() - start

        route = request.scope.get("route")
        path = getattr(route, "path_format", None) or request.url.path
        prefix = get_settings().API_PREFIX
        if path in (f"{prefix}/metrics", f"{prefix}/metrics/prometheus"):
            return response

        get_metrics_collector().record_request(
            method=request.method,
            path=path,
            status_code=response.status_code,
            duration=duration,
        )
        return response
