"""
Sans-I/O types for the request executor.

Nothing in here touches the network.
"""

from .types import (
    CORS_HEADERS,
    HTTPMethod,
    Request,
    Response,
    TransportRequest,
    TransportResponse,
)

__all__ = [
    "CORS_HEADERS",
    "HTTPMethod",
    "Request",
    "Response",
    "TransportRequest",
    "TransportResponse",
]
