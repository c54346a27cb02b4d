#!/usr/bin/env python
"""
The ``RequestExecutor`` class sends a request on behalf of a caller
and takes care of the authentication, so the caller doesn't need to
know if the server wants Digest or Basic.

``get_executor`` will return a RequestExecutor object, configured from
parameters, environmental variables or a configuration file.

``http_request`` is the one-shot variant taking and returning plain
dicts.
"""
import sys
from collections.abc import Mapping
from types import TracebackType
from typing import Any
from typing import Optional
from typing import Tuple
from typing import Union

from autoauth.base_executor import BaseRequestExecutor
from autoauth.io.base import SyncIOProtocol
from autoauth.io.sync import SyncIO
from autoauth.lib import error
from autoauth.lib.error import log
from autoauth.negotiator import negotiate
from autoauth.protocol.types import Request
from autoauth.protocol.types import Response

if sys.version_info < (3, 11):
    from typing_extensions import Self
else:
    from typing import Self


class RequestExecutor(BaseRequestExecutor):
    """
    Blocking request executor.

    Example::

        with RequestExecutor(timeout=10) as executor:
            response = executor.execute(
                Request(url="https://example.com/v1/eval", method="POST",
                        body="1+1", username="admin", password="admin")
            )
    """

    def __init__(
        self,
        timeout: Optional[float] = 30.0,
        ssl_verify_cert: Union[bool, str] = True,
        ssl_cert: Union[str, Tuple[str, str], None] = None,
        proxy: Optional[str] = None,
        transport: Optional[SyncIOProtocol] = None,
    ) -> None:
        """
        Sets up the executor.  See BaseRequestExecutor for the
        parameters; ``transport`` may be given to replace the default
        requests-based one, it will then not be closed by the executor.
        """
        super().__init__(
            timeout=timeout,
            ssl_verify_cert=ssl_verify_cert,
            ssl_cert=ssl_cert,
            proxy=proxy,
        )
        self._owns_transport = transport is None
        self.transport = transport or SyncIO(
            timeout=self.timeout,
            verify=self.ssl_verify_cert,
            cert=self.ssl_cert,
            proxy=self.proxy,
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: Optional[BaseException] = None,
        exc_value: Optional[BaseException] = None,
        traceback: Optional[TracebackType] = None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """
        Closes the transport, unless it was passed in
        """
        if self._owns_transport:
            self.transport.close()

    def execute(self, request: Union[Request, Mapping[str, Any]]) -> Response:
        """
        Send the request, negotiating authentication if credentials
        are given.

        Args:
            request: a Request, or a dict with the same keys

        Returns:
            the normalized Response

        Raises:
            UnsupportedMethodError: method isn't GET, POST, PUT or DELETE
            RequestFailedError: the request could not be sent
            BodyReadFailedError: the response body could not be read
        """
        request = self._objectify(request)
        outbound = self._prepare_request(request)
        outbound = negotiate(request, outbound, self.transport)

        try:
            raw = self.transport.execute(outbound)
        except error.TransportError as err:
            log.debug(f"request failed: {err.reason}")
            raise self._request_failed(outbound, err) from err
        return self._finish(outbound, raw)


def http_request(request: Mapping[str, Any], **config_data) -> dict:
    """
    One-shot request: takes a dict with ``url``, ``method``, and
    optionally ``headers``, ``body``, ``username`` and ``password``,
    returns a dict with ``status``, ``headers``, ``body`` and
    ``success``.  Extra keyword arguments go to the executor.
    """
    with RequestExecutor(**config_data) as executor:
        return executor.execute(request).to_dict()


def get_executor(
    check_config_file: bool = True,
    config_file: str = None,
    config_section: str = None,
    environment: bool = True,
    **config_data,
) -> "RequestExecutor":
    """
    This function will yield a RequestExecutor object.  It will read
    configuration from various sources, dependent on the parameters
    given, in this order:

    * Data from the parameters given
    * Environment variables prepended with `AUTOAUTH_`, like `AUTOAUTH_TIMEOUT`, `AUTOAUTH_SSL_VERIFY_CERT`.
    * Environment variables `AUTOAUTH_CONFIG_FILE` and `AUTOAUTH_CONFIG_SECTION` will be honored if environment is set
    * Configuration file.

    Falls back to an executor with default settings.
    """
    from autoauth import config

    conn_params = config.get_connection_params(
        check_config_file=check_config_file,
        config_file=config_file,
        config_section=config_section,
        environment=environment,
        **config_data,
    )
    return RequestExecutor(**(conn_params or {}))
