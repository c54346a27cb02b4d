"""
Authentication header utilities.

This module contains the scheme handling shared by both
RequestExecutor (sync) and AsyncRequestExecutor (async).  Digest
computation lives in :mod:`autoauth.lib.digest`.
"""

from __future__ import annotations

from base64 import b64encode


def extract_auth_types(header: str) -> set[str]:
    """
    Extract authentication types from WWW-Authenticate header.

    Parses the WWW-Authenticate header value and extracts the
    authentication scheme names (e.g., "basic", "digest", "bearer").
    It is crude - parameters like ``realm="a b"`` may leak a word into
    the set - so it's used for log messages only, never for decisions.

    Args:
        header: WWW-Authenticate header value from server response.

    Returns:
        Set of lowercase auth type strings.

    Example:
        >>> extract_auth_types('Basic realm="test", Digest realm="test"')
        {'basic', 'digest'}

    Reference:
        https://developer.mozilla.org/en-US/docs/Web/HTTP/Headers/WWW-Authenticate#syntax
    """
    return {h.split()[0] for h in header.lower().split(",") if h.split()}


def is_digest_challenge(header: str | None) -> bool:
    """True if the header value announces the Digest scheme.  Case sensitive."""
    return bool(header) and header.startswith("Digest")


def basic_authorization(username: str, password: str) -> str:
    """
    Build a HTTP Basic ``Authorization`` header value.

    Example:
        >>> basic_authorization("Aladdin", "open sesame")
        'Basic QWxhZGRpbjpvcGVuIHNlc2FtZQ=='
    """
    token = b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def mask_authorization(headers: dict[str, str]) -> dict[str, str]:
    """Copy of the headers with the Authorization value hidden, for logging"""
    return {
        k: (v.split(" ", 1)[0] + " ***" if k.lower() == "authorization" else v)
        for k, v in headers.items()
    }
