"""
HTTP Digest access authentication (RFC 2617), client side.

Only the unkeyed MD5 algorithm is implemented, that is what the
servers this library talks to demand.  A nonce is never reused: every
negotiation builds a fresh context, so the nonce-count is always the
first value.
"""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass

from autoauth.lib.url import request_uri

NONCE_COUNT = "00000001"


def parse_challenge(header: str) -> dict[str, str]:
    """
    Parse a ``WWW-Authenticate: Digest ...`` header value into a dict
    of directives.

    Parsing is best-effort and never fails: segments without ``=``
    are skipped, and a value without the ``Digest`` prefix is parsed
    anyway.

    Example:
        >>> parse_challenge('Digest realm="x", nonce="abc", qop=auth')
        {'realm': 'x', 'nonce': 'abc', 'qop': 'auth'}
    """
    if header.startswith("Digest "):
        header = header[len("Digest ") :]
    challenge = {}
    for part in header.split(","):
        key, sep, value = part.partition("=")
        if not sep:
            continue
        value = value.strip()
        if value.startswith('"'):
            value = value[1:]
        if value.endswith('"'):
            value = value[:-1]
        challenge[key.strip()] = value
    return challenge


def hash_md5(data: str) -> str:
    return hashlib.md5(data.encode("utf-8")).hexdigest()


def compute_ha1(username: str, realm: str, password: str) -> str:
    return hash_md5(f"{username}:{realm}:{password}")


def compute_ha2(method: str, uri: str) -> str:
    return hash_md5(f"{method}:{uri}")


def compute_response(
    ha1: str, nonce: str, ha2: str, qop: str = "", nc: str = "", cnonce: str = ""
) -> str:
    if qop:
        return hash_md5(f"{ha1}:{nonce}:{nc}:{cnonce}:{qop}:{ha2}")
    return hash_md5(f"{ha1}:{nonce}:{ha2}")


def make_cnonce() -> str:
    """A random 64 bit value, lowercase hex"""
    return format(secrets.randbits(64), "x")


@dataclass
class DigestContext:
    """The values derived for one digest negotiation"""

    cnonce: str
    ha1: str
    ha2: str
    response: str
    nc: str = NONCE_COUNT


def build_digest_context(
    username: str,
    password: str,
    method: str,
    uri: str,
    challenge: dict[str, str],
    cnonce: str | None = None,
) -> DigestContext:
    realm = challenge.get("realm", "")
    nonce = challenge.get("nonce", "")
    qop = challenge.get("qop", "")
    cnonce = cnonce or make_cnonce()

    ha1 = compute_ha1(username, realm, password)
    ## method goes into the hash exactly as the caller gave it
    ha2 = compute_ha2(method, uri)
    response = compute_response(ha1, nonce, ha2, qop, NONCE_COUNT, cnonce)
    return DigestContext(cnonce=cnonce, ha1=ha1, ha2=ha2, response=response)


def digest_authorization(
    username: str,
    password: str,
    method: str,
    url: str,
    www_authenticate: str,
    cnonce: str | None = None,
) -> str:
    """
    Compute the ``Authorization`` header value answering a digest
    challenge.

    Args:
        username, password: the credentials
        method: HTTP method, as given by the caller
        url: the full request url, the digest uri is derived from it
        www_authenticate: the raw challenge header value
        cnonce: client nonce, a random one is generated if not given

    Returns:
        The header value, starting with ``Digest``.

    Raises:
        InvalidUrlError: if the url can't be parsed
    """
    challenge = parse_challenge(www_authenticate)
    uri = request_uri(url)
    context = build_digest_context(
        username, password, method, uri, challenge, cnonce=cnonce
    )

    realm = challenge.get("realm", "")
    nonce = challenge.get("nonce", "")
    qop = challenge.get("qop", "")

    header = (
        f'Digest username="{username}", realm="{realm}", nonce="{nonce}", '
        f'uri="{uri}", response="{context.response}"'
    )
    if qop:
        header += f', qop={qop}, nc={context.nc}, cnonce="{context.cnonce}"'
    opaque = challenge.get("opaque")
    if opaque is not None:
        header += f', opaque="{opaque}"'
    return header
