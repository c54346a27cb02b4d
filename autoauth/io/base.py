"""
Abstract I/O protocol definition.

This module defines the interface that all transports must follow.
Connection reuse, pooling and TLS are the transport's own business.
"""

from typing import Protocol, runtime_checkable

from autoauth.protocol.types import TransportRequest, TransportResponse


@runtime_checkable
class SyncIOProtocol(Protocol):
    """
    Protocol defining the synchronous transport interface.

    Implementations must send a TransportRequest and return a
    TransportResponse, or raise TransportError if no response was
    received.  BodyReadFailedError is raised if the status line came
    in but the body could not be read.
    """

    def execute(self, request: TransportRequest) -> TransportResponse:
        """
        Execute a request and return the response.

        Args:
            request: The TransportRequest to execute

        Returns:
            TransportResponse with status, headers, and body
        """
        ...

    def close(self) -> None:
        """Close any resources (e.g., HTTP session)."""
        ...


@runtime_checkable
class AsyncIOProtocol(Protocol):
    """
    Protocol defining the asynchronous transport interface.

    Same contract as SyncIOProtocol, but awaitable.
    """

    async def execute(self, request: TransportRequest) -> TransportResponse:
        """
        Execute a request and return the response.

        Args:
            request: The TransportRequest to execute

        Returns:
            TransportResponse with status, headers, and body
        """
        ...

    async def close(self) -> None:
        """Close any resources (e.g., HTTP session)."""
        ...
