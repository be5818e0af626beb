"""
ASGI middleware for tracking HTTP request metrics.
Records request count, duration, and errors per route.
"""
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from upload_gateway.utils.metrics import http_requests_total, http_request_duration_seconds, errors_total

# Label used for paths that match no route, keeps cardinality bounded
UNMATCHED_PATH = "unmatched"


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to track HTTP metrics for Prometheus."""
    
    async def dispatch(self, request: Request, call_next):
        """Process request and record metrics."""
        if request.url.path == "/metrics":
            return await call_next(request)
        
        start_time = time.perf_counter()
        method = request.method
        
        try:
            response = await call_next(request)
        except Exception:
            errors_total.labels(error_type="exception").inc()
            raise
        
        path = self._route_path(request)
        status_code = response.status_code
        
        http_requests_total.labels(method=method, path=path, status=status_code).inc()
        http_request_duration_seconds.labels(method=method, path=path).observe(
            time.perf_counter() - start_time
        )
        
        if status_code >= 400:
            errors_total.labels(error_type=f"{status_code // 100}xx").inc()
        
        return response
    
    @staticmethod
    def _route_path(request: Request) -> str:
        """Path template of the matched route, resolved after routing."""
        route = request.scope.get("route")
        return getattr(route, "path", None) or UNMATCHED_PATH
