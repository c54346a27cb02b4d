"""
Base class for request executors.

This module contains the BaseRequestExecutor class which provides shared
functionality for both sync (RequestExecutor) and async
(AsyncRequestExecutor) executors.
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from tempfile import NamedTemporaryFile
from typing import Any

from autoauth.lib import error
from autoauth.lib.auth import mask_authorization
from autoauth.lib.error import log
from autoauth.lib.python_utilities import to_normal_str
from autoauth.lib.python_utilities import to_wire
from autoauth.protocol.types import HTTPMethod
from autoauth.protocol.types import Request
from autoauth.protocol.types import Response
from autoauth.protocol.types import TransportRequest
from autoauth.response import normalize_response

## Keyword arguments accepted by the executor constructors, and thereby
## the keys recognized in environment variables and config files
CONNKEYS = set(
    (
        "timeout",
        "ssl_verify_cert",
        "ssl_cert",
        "proxy",
    )
)


def normalize_proxy(proxy: str | None) -> str | None:
    """requests and aiohttp expect a scheme and a port on the proxy url"""
    if proxy is None:
        return None
    _proxy = proxy
    if "://" not in proxy:
        _proxy = "http://" + proxy
    # add a port is one is not specified
    p = _proxy.split(":")
    if len(p) == 2:
        _proxy += ":8080"
    log.debug("init - proxy: %s" % (_proxy))
    return _proxy


class BaseRequestExecutor:
    """
    Base class for executors providing request building and response
    handling shared by the sync and async variants.

    Executors hold configuration and a transport only.  Every call to
    ``execute`` is independent of earlier calls.
    """

    timeout: float | None = 30.0
    ssl_verify_cert: bool | str = True
    ssl_cert: str | tuple[str, str] | None = None
    proxy: str | None = None

    def __init__(
        self,
        timeout: float | None = 30.0,
        ssl_verify_cert: bool | str = True,
        ssl_cert: str | tuple[str, str] | None = None,
        proxy: str | None = None,
    ) -> None:
        """
        Args:
          timeout: seconds, passed on to the transport.  None for no timeout.
          ssl_verify_cert: False to accept any certificate (self-signed
            servers), or the path of a CA-bundle.
          ssl_cert: client certificate, a path or a (cert, key) tuple
          proxy: A string defining a proxy server: `scheme://hostname:port`. Scheme defaults to http, port defaults to 8080.
        """
        self.timeout = timeout
        self.ssl_verify_cert = ssl_verify_cert
        self.ssl_cert = ssl_cert
        self.proxy = normalize_proxy(proxy)

    @staticmethod
    def _objectify(request: Request | Mapping[str, Any]) -> Request:
        if isinstance(request, Request):
            return request
        return Request.from_dict(request)

    def _prepare_request(self, request: Request) -> TransportRequest:
        """Validate the method, copy headers and attach the body.

        The body goes on before any auth negotiation, so the probe is
        the same request as the real one.

        Raises:
            UnsupportedMethodError: before anything is sent
        """
        method = HTTPMethod.parse(request.method, url=request.url)
        headers = {}
        for key, value in (request.headers or {}).items():
            headers[key] = value
        outbound = TransportRequest(
            method=method,
            url=request.url,
            headers=headers,
            body=to_wire(request.body),
        )
        log.debug(
            f"sending request - method={method.value}, url={request.url}, "
            f"headers={mask_authorization(headers)}\nbody:\n{to_normal_str(request.body)}"
        )
        return outbound

    def _request_failed(self, outbound: TransportRequest, err: error.TransportError):
        return error.RequestFailedError(
            url=outbound.url, reason=f"HTTP request failed: {err.reason}"
        )

    def _finish(self, outbound: TransportRequest, raw) -> Response:
        response = normalize_response(raw, outbound.url)
        if error.debug_dump_communication:
            self._dump_communication(outbound, raw, response)
        return response

    def _dump_communication(self, outbound: TransportRequest, raw, response: Response) -> None:
        with NamedTemporaryFile(prefix="autoauthcomm", delete=False) as commlog:
            commlog.write(b"=" * 80 + b"\n")
            commlog.write(f"{datetime.datetime.now():%FT%H:%M:%S}".encode("utf-8"))
            commlog.write(b"\n====>\n")
            commlog.write(f"{outbound.method.value} {outbound.url}\n".encode("utf-8"))
            headers = mask_authorization(outbound.headers)
            commlog.write(b"\n".join(to_wire(f"{x}: {headers[x]}") for x in headers))
            commlog.write(b"\n\n")
            commlog.write(outbound.body or b"")
            commlog.write(b"<====\n")
            commlog.write(f"{raw.status} {raw.reason}\n".encode("utf-8"))
            commlog.write(
                b"\n".join(
                    to_wire(f"{x}: {response.headers[x]}") for x in response.headers
                )
            )
            commlog.write(b"\n\n")
            commlog.write(to_wire(response.body))
            commlog.write(b"\n")
