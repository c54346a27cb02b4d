"""
Authentication negotiation.

Before a request with credentials is sent, an identical request
without credentials is sent as a probe.  The outcome of the probe
decides what goes into the ``Authorization`` header of the real
request:

* the probe could not be sent at all: Basic, since nothing was
  learned about the server and Basic is understood everywhere
* 401 with a ``Digest`` challenge: a digest response to it
* 401 with any other challenge, or none: nothing
* any other status: nothing, the server did not ask for credentials

Only the status and the headers of the probe are looked at.  A probe
whose body could not be read is judged on what came before the body.

Non-idempotent requests reach the server twice when it answers the
probe with 401.  Nothing is cached between calls, so the next call
probes again.
"""

from typing import Optional

from autoauth.io.base import AsyncIOProtocol, SyncIOProtocol
from autoauth.lib import error
from autoauth.lib.auth import basic_authorization
from autoauth.lib.auth import extract_auth_types
from autoauth.lib.auth import is_digest_challenge
from autoauth.lib.digest import digest_authorization
from autoauth.lib.error import log
from autoauth.protocol.types import Request, TransportRequest, TransportResponse


def authorization_from_probe(
    request: Request, probe: TransportResponse
) -> Optional[str]:
    """
    Decide the Authorization header value given a probe response.

    Args:
        request: the caller's request, credentials included
        probe: what the server answered to the unauthenticated probe

    Returns:
        The header value, or None if the real request should go
        without one.
    """
    credentials = request.credentials
    if credentials is None or probe.status != 401:
        return None
    username, password = credentials

    www_authenticate = probe.header("WWW-Authenticate")
    if not is_digest_challenge(www_authenticate):
        msg = "Server answered 401 without a digest challenge, sending the request without authentication"
        if www_authenticate:
            msg += "\nSupported authentication types: %s" % (
                ", ".join(sorted(extract_auth_types(www_authenticate)))
            )
        log.warning(msg)
        return None

    try:
        return digest_authorization(
            username, password, request.method, request.url, www_authenticate
        )
    except error.InvalidUrlError as err:
        log.warning(f"Could not answer digest challenge, {err}")
        return None


def _fallback_authorization(request: Request, err: error.AutoAuthError) -> Optional[str]:
    if isinstance(err, error.TransportError):
        log.debug(f"probe failed ({err.reason}), falling back to basic auth")
        username, password = request.credentials
        return basic_authorization(username, password)
    if err.response is not None:
        log.debug(f"probe body unreadable ({err.reason}), status {err.response.status}")
        return authorization_from_probe(request, err.response)
    log.debug(f"probe response unreadable ({err.reason}), no authentication")
    return None


def _apply(outbound: TransportRequest, authorization: Optional[str]) -> TransportRequest:
    if authorization is None:
        return outbound
    return outbound.with_header("Authorization", authorization)


def negotiate(
    request: Request, outbound: TransportRequest, transport: SyncIOProtocol
) -> TransportRequest:
    """
    Send the probe and return the request to send for real.

    Args:
        request: the caller's request
        outbound: the request exactly as it will be sent, without auth
        transport: used to send the probe

    Returns:
        outbound, possibly with an Authorization header added
    """
    if request.credentials is None:
        return outbound
    log.debug(f"sending probe - method={outbound.method.value}, url={outbound.url}")
    try:
        probe = transport.execute(outbound)
    except (error.TransportError, error.BodyReadFailedError) as err:
        return _apply(outbound, _fallback_authorization(request, err))
    log.debug(f"probe answered with status {probe.status}")
    return _apply(outbound, authorization_from_probe(request, probe))


async def async_negotiate(
    request: Request, outbound: TransportRequest, transport: AsyncIOProtocol
) -> TransportRequest:
    """Async version of :func:`negotiate`."""
    if request.credentials is None:
        return outbound
    log.debug(f"sending probe - method={outbound.method.value}, url={outbound.url}")
    try:
        probe = await transport.execute(outbound)
    except (error.TransportError, error.BodyReadFailedError) as err:
        return _apply(outbound, _fallback_authorization(request, err))
    log.debug(f"probe answered with status {probe.status}")
    return _apply(outbound, authorization_from_probe(request, probe))
