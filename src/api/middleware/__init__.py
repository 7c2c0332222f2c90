# API Middleware
"""
Middleware components for the key checker API.
"""

from src.api.middleware.request_context import RequestContextMiddleware, get_request_id

__all__ = [
    "RequestContextMiddleware",
    "get_request_id",
]
