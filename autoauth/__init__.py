#!/usr/bin/env python
import logging

__version__ = "1.0.0"

from .executor import RequestExecutor, get_executor, http_request
from .async_executor import AsyncRequestExecutor
from .protocol.types import HTTPMethod, Request, Response
from .lib.error import (
    AutoAuthError,
    BodyReadFailedError,
    InvalidUrlError,
    RequestFailedError,
    UnsupportedMethodError,
)

# Silence notification of no default logging handler
log = logging.getLogger("autoauth")


class NullHandler(logging.Handler):
    def emit(self, record) -> None:
        pass


log.addHandler(NullHandler())

__all__ = [
    "__version__",
    "RequestExecutor",
    "AsyncRequestExecutor",
    "get_executor",
    "http_request",
    "HTTPMethod",
    "Request",
    "Response",
    "AutoAuthError",
    "UnsupportedMethodError",
    "InvalidUrlError",
    "RequestFailedError",
    "BodyReadFailedError",
]
