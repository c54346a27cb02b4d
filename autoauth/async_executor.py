#!/usr/bin/env python
"""
Async request executor.

Same semantics as autoauth.executor.RequestExecutor, but the network
sends are awaited.  Probe and real request are still strictly ordered.
"""

import sys
from collections.abc import Mapping
from types import TracebackType
from typing import Any, Optional, Tuple, Union

from autoauth.base_executor import BaseRequestExecutor
from autoauth.io.async_ import AsyncIO
from autoauth.io.base import AsyncIOProtocol
from autoauth.lib import error
from autoauth.lib.error import log
from autoauth.negotiator import async_negotiate
from autoauth.protocol.types import Request, Response

if sys.version_info < (3, 11):
    from typing_extensions import Self
else:
    from typing import Self


class AsyncRequestExecutor(BaseRequestExecutor):
    """
    Cooperative request executor, built on aiohttp unless another
    transport is given.

    Example::

        async with AsyncRequestExecutor() as executor:
            response = await executor.execute(request)
    """

    def __init__(
        self,
        timeout: Optional[float] = 30.0,
        ssl_verify_cert: Union[bool, str] = True,
        ssl_cert: Union[str, Tuple[str, str], None] = None,
        proxy: Optional[str] = None,
        transport: Optional[AsyncIOProtocol] = None,
    ) -> None:
        super().__init__(
            timeout=timeout,
            ssl_verify_cert=ssl_verify_cert,
            ssl_cert=ssl_cert,
            proxy=proxy,
        )
        self._owns_transport = transport is None
        self.transport = transport or AsyncIO(
            timeout=self.timeout,
            verify=self.ssl_verify_cert,
            cert=self.ssl_cert,
            proxy=self.proxy,
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[BaseException] = None,
        exc_value: Optional[BaseException] = None,
        traceback: Optional[TracebackType] = None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_transport:
            await self.transport.close()

    async def execute(self, request: Union[Request, Mapping[str, Any]]) -> Response:
        """
        Send the request, negotiating authentication if credentials
        are given.

        Args:
            request: a Request, or a dict with the same keys

        Returns:
            the normalized Response
        """
        request = self._objectify(request)
        outbound = self._prepare_request(request)
        outbound = await async_negotiate(request, outbound, self.transport)

        try:
            raw = await self.transport.execute(outbound)
        except error.TransportError as err:
            log.debug(f"request failed: {err.reason}")
            raise self._request_failed(outbound, err) from err
        return self._finish(outbound, raw)


async def http_request(request: Mapping[str, Any], **config_data) -> dict:
    """Async version of autoauth.executor.http_request"""
    async with AsyncRequestExecutor(**config_data) as executor:
        response = await executor.execute(request)
        return response.to_dict()


def get_executor(
    check_config_file: bool = True,
    config_file: Optional[str] = None,
    config_section: Optional[str] = None,
    environment: bool = True,
    **config_data,
) -> AsyncRequestExecutor:
    """
    Get an AsyncRequestExecutor, configured the same way as
    autoauth.executor.get_executor.  Nothing is sent over the
    network until execute is awaited, so this isn't a coroutine.
    """
    from autoauth import config

    conn_params = config.get_connection_params(
        check_config_file=check_config_file,
        config_file=config_file,
        config_section=config_section,
        environment=environment,
        **config_data,
    )
    return AsyncRequestExecutor(**(conn_params or {}))
