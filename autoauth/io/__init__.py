"""
I/O layer for the request executor.

This module provides sync and async transports for sending
TransportRequest objects and returning TransportResponse objects.

The I/O layer is intentionally thin - it only handles HTTP transport.
Authentication negotiation is in autoauth.negotiator.

Example (sync):
    from autoauth.io import SyncIO

    with SyncIO() as io:
        response = io.execute(request)

Example (async):
    from autoauth.io import AsyncIO

    async with AsyncIO() as io:
        response = await io.execute(request)
"""

from .base import AsyncIOProtocol, SyncIOProtocol
from .sync import SyncIO
from .async_ import AsyncIO

__all__ = [
    # Protocols
    "SyncIOProtocol",
    "AsyncIOProtocol",
    # Implementations
    "SyncIO",
    "AsyncIO",
]
