#!/usr/bin/env python
import logging
import os
from typing import Optional
from typing import TYPE_CHECKING

from autoauth import __version__

if TYPE_CHECKING:
    from autoauth.protocol.types import TransportResponse

## Environmental variables prepended with "PYTHON_AUTOAUTH" are used for debug purposes,
## environmental variables prepended with "AUTOAUTH_" are for executor parameters
debug_dump_communication = os.environ.get("PYTHON_AUTOAUTH_COMMDUMP", False)

## one of DEBUG, DEVELOPMENT, PRODUCTION
debugmode = os.environ.get("PYTHON_AUTOAUTH_DEBUGMODE")
if not debugmode:
    if "dev" in __version__ or __version__ == "(unknown)":
        debugmode = "DEVELOPMENT"
    else:
        debugmode = "PRODUCTION"

log = logging.getLogger("autoauth")
if debugmode.startswith("DEBUG"):
    log.setLevel(logging.DEBUG)
else:
    log.setLevel(logging.WARNING)


class AutoAuthError(Exception):
    url: Optional[str] = None
    reason: str = "no reason"

    def __init__(self, url: Optional[str] = None, reason: Optional[str] = None) -> None:
        if url:
            self.url = url
        if reason:
            self.reason = reason
        super().__init__(self.reason)

    def __str__(self) -> str:
        return "%s at '%s', reason %s" % (
            self.__class__.__name__,
            self.url,
            self.reason,
        )


class UnsupportedMethodError(AutoAuthError):
    """
    The caller asked for a method other than GET, POST, PUT or
    DELETE.  Raised before anything is sent.
    """

    pass


class InvalidUrlError(AutoAuthError):
    """
    The url could not be parsed while deriving the digest uri.
    """

    pass


class TransportError(AutoAuthError):
    """
    Raised by the I/O layer when a request could not be sent or no
    status line was received.  The reason property carries the message
    of the underlying library exception.
    """

    pass


class RequestFailedError(AutoAuthError):
    pass


class BodyReadFailedError(AutoAuthError):
    """
    The response was received but its body could not be read or
    decoded.  When the status line and headers made it through, the
    transport puts them in ``response``, with an empty body.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        reason: Optional[str] = None,
        response: Optional["TransportResponse"] = None,
    ) -> None:
        super().__init__(url=url, reason=reason)
        self.response = response
