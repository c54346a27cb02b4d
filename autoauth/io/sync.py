"""
Synchronous I/O implementation using the requests library.
"""

from collections.abc import Mapping
from typing import Dict, Optional, Tuple, Union

import requests

from autoauth.lib import error
from autoauth.lib.error import log
from autoauth.protocol.types import TransportRequest, TransportResponse


def _declared_encoding(response: requests.Response) -> Optional[str]:
    ## requests guesses ISO-8859-1 for text/* without a charset, we
    ## only want what the server actually said
    content_type = response.headers.get("Content-Type", "")
    if "charset=" in content_type.lower():
        return response.encoding
    return None


def _wire_headers(headers: Mapping[str, str]) -> Dict[str, Union[str, bytes]]:
    ## http.client encodes str header values as latin-1, non-ascii
    ## values go out as utf-8 bytes instead
    ret = {}
    for key, value in headers.items():
        if isinstance(value, str) and not value.isascii():
            value = value.encode("utf-8")
        ret[key] = value
    return ret


def _no_auth(request: requests.PreparedRequest) -> requests.PreparedRequest:
    ## with an auth callable given, requests does not look into ~/.netrc
    return request


class SyncIO:
    """
    Synchronous I/O shell using the requests library.

    This is a thin wrapper that sends TransportRequest objects via HTTP
    and returns TransportResponse objects.  It does no authentication
    of its own; redirects are followed the way requests does it.

    Example:
        with SyncIO(timeout=10) as io:
            response = io.execute(request)
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = 30.0,
        verify: Union[bool, str] = True,
        cert: Union[str, Tuple[str, str], None] = None,
        proxy: Optional[str] = None,
    ):
        """
        Initialize the sync I/O handler.

        Args:
            session: Existing requests Session to use (creates new if None)
            timeout: Request timeout in seconds
            verify: Verify SSL certificates, or path to a CA bundle
            cert: client certificate, passed on to requests
            proxy: proxy url, used for all schemes
        """
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.timeout = timeout
        self.verify = verify
        self.cert = cert
        self.proxy = proxy

    def execute(self, request: TransportRequest) -> TransportResponse:
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
        proxies = None
        if self.proxy is not None:
            proxies = {"http": self.proxy, "https": self.proxy}
        try:
            response = self.session.request(
                method=request.method.value,
                url=request.url,
                headers=_wire_headers(request.headers),
                data=request.body,
                timeout=self.timeout,
                verify=self.verify,
                cert=self.cert,
                proxies=proxies,
                auth=_no_auth,
                stream=True,
            )
        except (requests.RequestException, ValueError) as err:
            ## ValueError: header values or urls http.client refuses to send
            raise error.TransportError(url=request.url, reason=str(err)) from err
        log.debug("server responded with %i %s" % (response.status_code, response.reason))

        try:
            body = response.content
        except requests.RequestException as err:
            raise error.BodyReadFailedError(
                url=request.url,
                reason=f"Failed to read response body: {err}",
                response=TransportResponse(
                    status=response.status_code,
                    headers=dict(response.headers),
                    body=b"",
                    reason=response.reason or "",
                ),
            ) from err
        finally:
            response.close()

        return TransportResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=body or b"",
            encoding=_declared_encoding(response),
            reason=response.reason or "",
        )

    def close(self) -> None:
        """Close the session if we created it."""
        if self._owns_session and self.session:
            self.session.close()

    def __enter__(self) -> "SyncIO":
        """Context manager entry."""
        return self

    def __exit__(self, *args) -> None:
        """Context manager exit."""
        self.close()
