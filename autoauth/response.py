"""
Response normalization.

Turns what the transport received into the Response handed to the
caller: body decoded as text, permissive CORS headers, success flag.
"""

import codecs

from autoauth.lib import error
from autoauth.lib.error import log
from autoauth.protocol.types import CORS_HEADERS
from autoauth.protocol.types import Response
from autoauth.protocol.types import TransportResponse


def decode_body(raw: TransportResponse, url: str = None) -> str:
    """
    Decode the body using the charset the server declared, or utf-8.

    Raises:
        BodyReadFailedError: if the body isn't valid in that charset
    """
    encoding = raw.encoding or "utf-8"
    try:
        codecs.lookup(encoding)
    except LookupError:
        log.debug(f"unknown charset {encoding}, decoding as utf-8")
        encoding = "utf-8"
    try:
        return raw.body.decode(encoding)
    except UnicodeDecodeError as err:
        raise error.BodyReadFailedError(
            url=url, reason=f"Failed to read response body: {err}"
        ) from err


def cors_headers(headers: dict) -> dict[str, str]:
    """
    Copy the headers, then force the CORS headers in.

    Server headers with the same names, in any letter case, are
    replaced.
    """
    overridden = {name.lower() for name in CORS_HEADERS}
    ret = {k: v for k, v in headers.items() if k.lower() not in overridden}
    ret.update(CORS_HEADERS)
    return ret


def normalize_response(raw: TransportResponse, url: str = None) -> Response:
    log.debug("response headers: " + str(raw.headers))
    log.debug("response status: " + str(raw.status))
    return Response(
        status=raw.status,
        headers=cors_headers(raw.headers),
        body=decode_body(raw, url),
    )
