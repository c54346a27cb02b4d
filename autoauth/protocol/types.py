"""
Core types for the request executor.

These dataclasses represent the caller's request, the request handed
to the transport, and the responses on both sides, independent of
any I/O implementation.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from autoauth.lib import error

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class HTTPMethod(Enum):
    """The HTTP methods the executor will send."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, method: str, url: Optional[str] = None) -> "HTTPMethod":
        """
        Resolve a method name, case-insensitively.

        Raises:
            UnsupportedMethodError: for anything but GET, POST, PUT, DELETE
        """
        try:
            return cls(str(method).upper())
        except ValueError:
            raise error.UnsupportedMethodError(
                url=url, reason=f"Unsupported HTTP method: {method}"
            ) from None


@dataclass(frozen=True)
class Request:
    """
    A request as given by the caller.

    Attributes:
        url: Full URL for the request
        method: HTTP method name, as given.  Validated by the executor.
        headers: HTTP headers, sent verbatim
        body: Request body (optional)
        username: user name for authentication (optional)
        password: password for authentication (optional)
    """

    url: str
    method: str = "GET"
    headers: Optional[Mapping[str, str]] = None
    body: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def credentials(self) -> Optional[tuple[str, str]]:
        """(username, password), or None unless both are given"""
        if self.username is None or self.password is None:
            return None
        return (self.username, self.password)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Request":
        return cls(
            url=data["url"],
            method=data.get("method", "GET"),
            headers=data.get("headers"),
            body=data.get("body"),
            username=data.get("username"),
            password=data.get("password"),
        )


@dataclass(frozen=True)
class TransportRequest:
    """
    Represents an HTTP request to be sent by a transport.

    This is a pure data structure with no I/O.  The probe and the real
    request are built from the same TransportRequest, so they carry the
    same method, headers and body.
    """

    method: HTTPMethod
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None

    def with_header(self, name: str, value: str) -> "TransportRequest":
        """Return new request with additional header."""
        new_headers = {**self.headers, name: value}
        return TransportRequest(
            method=self.method,
            url=self.url,
            headers=new_headers,
            body=self.body,
        )


@dataclass(frozen=True)
class TransportResponse:
    """
    Represents an HTTP response as received by a transport.

    Attributes:
        status: HTTP status code
        headers: HTTP headers as dict
        body: Response body as bytes
        encoding: charset declared by the server, if any
        reason: reason phrase, if the transport knows it
    """

    status: int
    headers: dict[str, str]
    body: bytes
    encoding: Optional[str] = None
    reason: str = ""

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup"""
        name = name.lower()
        for key, value in self.headers.items():
            if key.lower() == name:
                return value
        return None


@dataclass(frozen=True)
class Response:
    """
    The normalized response handed back to the caller.

    ``success`` is derived from the status and can't be set.
    """

    status: int
    headers: dict[str, str]
    body: str
    success: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "success", 200 <= self.status < 300)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "headers": dict(self.headers),
            "body": self.body,
            "success": self.success,
        }
