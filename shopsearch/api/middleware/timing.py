"""
Request Timing Middleware
Tracks request latency for the status endpoint.
"""

import logging
import time
from collections import deque
from threading import Lock
from typing import Callable, Dict, List, Optional

import numpy as np
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class LatencyTracker:
    """
    Rolling window of recent request latencies.
    """

    def __init__(self, window_size: int = 1000):
        """
        Initialize latency tracker.

        Args:
            window_size: Number of recent requests to track
        """
        self.window_size = window_size
        self.latencies: deque = deque(maxlen=window_size)
        self.lock = Lock()

    def record(self, latency_ms: float) -> None:
        """Record a latency measurement."""
        with self.lock:
            self.latencies.append(latency_ms)

    def get_stats(self) -> Dict[str, float]:
        """
        Get latency statistics.

        Returns:
            Dict with count, p50, p95, p99, mean, min, max
        """
        with self.lock:
            values: List[float] = list(self.latencies)

        if not values:
            return {
                "count": 0,
                "p50": 0.0,
                "p95": 0.0,
                "p99": 0.0,
                "mean": 0.0,
                "min": 0.0,
                "max": 0.0,
            }

        latencies = np.array(values, dtype=float)
        p50, p95, p99 = np.percentile(latencies, [50, 95, 99])

        return {
            "count": int(latencies.size),
            "p50": float(p50),
            "p95": float(p95),
            "p99": float(p99),
            "mean": float(latencies.mean()),
            "min": float(latencies.min()),
            "max": float(latencies.max()),
        }


# Global latency tracker
_latency_tracker = LatencyTracker()


def get_latency_tracker() -> LatencyTracker:
    """Get global latency tracker."""
    return _latency_tracker


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to track request timing.

    Records latency for each request, adds an X-Response-Time header, and
    warns about slow requests.
    """

    def __init__(
        self,
        app,
        tracker: Optional[LatencyTracker] = None,
        slow_request_ms: float = 300.0,
    ):
        """
        Initialize timing middleware.

        Args:
            app: FastAPI application
            tracker: Latency tracker (uses global if not provided)
            slow_request_ms: Threshold above which requests are logged as slow
        """
        super().__init__(app)
        self.tracker = tracker or get_latency_tracker()
        self.slow_request_ms = slow_request_ms

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and track timing."""
        start_time = time.time()

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        self.tracker.record(duration_ms)

        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

        if duration_ms > self.slow_request_ms:
            logger.warning(
                "Slow request detected",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "duration_ms": duration_ms,
                },
            )

        return response
