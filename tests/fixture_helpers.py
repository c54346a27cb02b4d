"""
Shared test fixture helpers for both sync and async tests.

The fake transports replay scripted outcomes and record every request
they were asked to send, so the tests can check what went over the
"wire" without any network access.
"""

from typing import Any

from autoauth.lib import error
from autoauth.protocol.types import TransportResponse

DIGEST_CHALLENGE = (
    'Digest realm="testrealm@host.com", qop="auth", '
    'nonce="dcd98b7102dd2f0e8b11d0f600bfb0c093", '
    'opaque="5ccc069c403ebaf9f0171e9517f40e41"'
)


def make_response(
    status: int = 200,
    headers: dict = None,
    body: bytes = b"",
    encoding: str = None,
) -> TransportResponse:
    """Create a transport response."""
    return TransportResponse(
        status=status, headers=headers or {}, body=body, encoding=encoding
    )


def unauthorized(challenge: str = DIGEST_CHALLENGE) -> TransportResponse:
    headers = {"WWW-Authenticate": challenge} if challenge is not None else {}
    return make_response(401, headers, b"<html>Unauthorized</html>")


def connection_refused() -> error.TransportError:
    return error.TransportError(url="http://example.com/", reason="Connection refused")


class FakeTransport:
    """
    Sync transport returning (or raising) the scripted outcomes in order.
    """

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes)
        self.sent = []
        self.closed = False

    def execute(self, request):
        self.sent.append(request)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True


class AsyncFakeTransport(FakeTransport):
    """Async flavour of FakeTransport"""

    async def execute(self, request):
        return FakeTransport.execute(self, request)

    async def close(self) -> None:
        self.closed = True
