#!/usr/bin/env python
from urllib.parse import urlsplit

from requests.utils import requote_uri

from autoauth.lib import error


def request_uri(url: str) -> str:
    """
    Derive the request-uri used in the digest calculation.

    This is the path component of the url, followed by ``?`` and the
    query string when the url has one, percent-encoded the same way
    the transports encode the url before it goes on the request line.
    An url with no path gives ``/``.

    Raises:
        InvalidUrlError: the url has no scheme or host, or urllib
            refuses to parse it (bad port, unbalanced brackets, ...)
    """
    try:
        parsed = urlsplit(url)
        ## accessing the port validates it
        parsed.port
    except ValueError as err:
        raise error.InvalidUrlError(url=url, reason=str(err)) from err
    if not parsed.scheme or not parsed.netloc:
        raise error.InvalidUrlError(
            url=url, reason="an absolute url with scheme and host is required"
        )
    ## spaces and non-ascii characters are sent percent-encoded, already
    ## encoded sequences are left alone
    path = requote_uri(parsed.path) or "/"
    if parsed.query:
        return f"{path}?{requote_uri(parsed.query)}"
    return path
