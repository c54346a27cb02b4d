"""
Asynchronous I/O implementation using aiohttp library.
"""

import asyncio
import ssl
from typing import Optional, Tuple, Union

import aiohttp

from autoauth.lib import error
from autoauth.lib.error import log
from autoauth.protocol.types import TransportRequest, TransportResponse


def _ssl_option(
    verify: Union[bool, str], cert: Union[str, Tuple[str, str], None]
) -> Union[bool, ssl.SSLContext]:
    if verify is False:
        return False
    if not isinstance(verify, str) and not cert:
        return True
    context = ssl.create_default_context(
        cafile=verify if isinstance(verify, str) else None
    )
    if isinstance(cert, tuple):
        context.load_cert_chain(*cert)
    elif cert:
        context.load_cert_chain(cert)
    return context


class AsyncIO:
    """
    Asynchronous I/O shell using aiohttp library.

    This is a thin wrapper that sends TransportRequest objects via HTTP
    and returns TransportResponse objects.

    Example:
        async with AsyncIO() as io:
            response = await io.execute(request)
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: Optional[float] = 30.0,
        verify: Union[bool, str] = True,
        cert: Union[str, Tuple[str, str], None] = None,
        proxy: Optional[str] = None,
    ):
        """
        Initialize the async I/O handler.

        Args:
            session: Existing aiohttp ClientSession to use (creates new if None)
            timeout: Request timeout in seconds
            verify: Verify SSL certificates, or path to a CA bundle
            cert: client certificate
            proxy: proxy url
        """
        self._session = session
        self._owns_session = session is None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.ssl = _ssl_option(verify, cert)
        self.proxy = proxy

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def execute(self, request: TransportRequest) -> TransportResponse:
        """
        Execute a TransportRequest and return TransportResponse.

        Args:
            request: The request to execute

        Returns:
            TransportResponse with status, headers, and body

        Raises:
            TransportError: no response was received
            BodyReadFailedError: the body could not be read
        """
        session = await self._get_session()

        try:
            async with session.request(
                method=request.method.value,
                url=request.url,
                headers=request.headers,
                data=request.body,
                proxy=self.proxy,
                ssl=self.ssl,
            ) as response:
                log.debug(f"server responded with {response.status} {response.reason}")
                try:
                    body = await response.read()
                except (aiohttp.ClientError, asyncio.TimeoutError) as err:
                    raise error.BodyReadFailedError(
                        url=request.url,
                        reason=f"Failed to read response body: {err}",
                        response=TransportResponse(
                            status=response.status,
                            headers=dict(response.headers),
                            body=b"",
                            reason=response.reason or "",
                        ),
                    ) from err
                return TransportResponse(
                    status=response.status,
                    headers=dict(response.headers),
                    body=body,
                    encoding=response.charset,
                    reason=response.reason or "",
                )
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as err:
            raise error.TransportError(url=request.url, reason=str(err) or repr(err)) from err

    async def close(self) -> None:
        """Close the session if we created it."""
        if self._session and self._owns_session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "AsyncIO":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args) -> None:
        """Async context manager exit."""
        await self.close()
