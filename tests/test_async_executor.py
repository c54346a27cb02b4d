#!/usr/bin/env python
# -*- encoding: utf-8 -*-
"""
Unit tests for the async executor.

Rule: None of the tests in this file should initiate any internet
communication.  AsyncFakeTransport stands in for aiohttp.
"""
from unittest import mock

import pytest

from autoauth import AsyncRequestExecutor
from autoauth.async_executor import get_executor
from autoauth.async_executor import http_request
from autoauth.io.async_ import AsyncIO
from autoauth.lib import error
from autoauth.lib.auth import basic_authorization
from autoauth.protocol.types import Request

from fixture_helpers import AsyncFakeTransport
from fixture_helpers import connection_refused
from fixture_helpers import make_response
from fixture_helpers import unauthorized

URL = "https://db.example.com/v1/documents?uri=/a.xml"


class TestAsyncRequestExecutor:
    @pytest.mark.asyncio
    async def test_unsupported_method(self) -> None:
        transport = AsyncFakeTransport()
        executor = AsyncRequestExecutor(transport=transport)
        with pytest.raises(error.UnsupportedMethodError):
            await executor.execute(Request(url=URL, method="PATCH", username="u", password="p"))
        assert transport.sent == []

    @pytest.mark.asyncio
    async def test_digest(self) -> None:
        transport = AsyncFakeTransport(unauthorized(), make_response(201, body=b"created"))
        async with AsyncRequestExecutor(transport=transport) as executor:
            response = await executor.execute(
                Request(url=URL, method="put", body="<a/>", username="u", password="p")
            )
        probe, real = transport.sent
        assert "Authorization" not in probe.headers
        assert 'uri="/v1/documents?uri=/a.xml"' in real.headers["Authorization"]
        assert probe.body == real.body == b"<a/>"
        assert response.success
        assert response.body == "created"
        assert not transport.closed

    @pytest.mark.asyncio
    async def test_basic_fallback(self) -> None:
        transport = AsyncFakeTransport(connection_refused(), make_response(200))
        executor = AsyncRequestExecutor(transport=transport)
        await executor.execute(Request(url=URL, username="u", password="p"))
        assert transport.sent[1].headers["Authorization"] == basic_authorization("u", "p")

    @pytest.mark.asyncio
    async def test_non_digest_challenge(self) -> None:
        transport = AsyncFakeTransport(unauthorized("Bearer"), unauthorized("Bearer"))
        executor = AsyncRequestExecutor(transport=transport)
        response = await executor.execute(Request(url=URL, username="u", password="p"))
        assert "Authorization" not in transport.sent[1].headers
        assert response.status == 401
        assert not response.success

    @pytest.mark.asyncio
    async def test_request_failed(self) -> None:
        transport = AsyncFakeTransport(connection_refused())
        with pytest.raises(error.RequestFailedError):
            await AsyncRequestExecutor(transport=transport).execute({"url": URL, "method": "GET"})

    @pytest.mark.asyncio
    async def test_own_transport_is_closed(self) -> None:
        with mock.patch.object(AsyncIO, "close", new_callable=mock.AsyncMock) as close:
            async with AsyncRequestExecutor() as executor:
                assert isinstance(executor.transport, AsyncIO)
        close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_http_request(self) -> None:
        with mock.patch.object(
            AsyncIO, "execute", new_callable=mock.AsyncMock
        ) as execute, mock.patch.object(AsyncIO, "close", new_callable=mock.AsyncMock):
            execute.return_value = make_response(200, {"ETag": "1"}, b"[]")
            result = await http_request({"url": URL, "method": "GET"})
        assert result["status"] == 200
        assert result["headers"]["ETag"] == "1"
        assert result["body"] == "[]"

    def test_get_executor(self) -> None:
        executor = get_executor(timeout=7, ssl_verify_cert=False)
        assert isinstance(executor, AsyncRequestExecutor)
        assert executor.timeout == 7
        assert executor.transport.ssl is False
