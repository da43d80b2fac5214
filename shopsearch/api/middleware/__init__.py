"""
Middleware
Custom middleware for the FastAPI application.
"""

from .logging import RequestLoggingMiddleware
from .timing import RequestTimingMiddleware, LatencyTracker, get_latency_tracker

__all__ = [
    "RequestLoggingMiddleware",
    "RequestTimingMiddleware",
    "LatencyTracker",
    "get_latency_tracker",
]
