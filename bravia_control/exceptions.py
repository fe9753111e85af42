#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Exceptions defined by this package"""

from __future__ import annotations

from enum import Enum

from .internal_types import *

class ErrorKind(str, Enum):
    """Classification of a failed device interaction."""
    UNKNOWN_COMMAND = "unknown_command"
    MISSING_RESULT = "missing_result"
    HTTP_STATUS = "http_status"
    TRANSPORT = "transport"
    APPLICATION = "application"
    MALFORMED_RESPONSE = "malformed_response"
    CONFIG = "config"
    DISCOVERY = "discovery"

class BraviaError(Exception):
    """Base class for all error exceptions defined by this package."""
    kind: ErrorKind = ErrorKind.TRANSPORT

class BraviaConfigError(BraviaError):
    """Invalid client configuration or host specifier."""
    kind = ErrorKind.CONFIG

class UnknownCommandError(BraviaError):
    """A command name was not found in the device's IRCC command table."""
    kind = ErrorKind.UNKNOWN_COMMAND

    name: str

    def __init__(self, name: str):
        super().__init__(f"Unknown IRCC code {name}.")
        self.name = name

class MissingResultError(BraviaError):
    """A decoded response body did not contain the expected "result" field."""
    kind = ErrorKind.MISSING_RESULT

    operation: str
    raw_body: str

    def __init__(self, operation: str, raw_body: str):
        super().__init__(f"{operation}. Response error. Missing result. {raw_body}")
        self.operation = operation
        self.raw_body = raw_body

class HttpStatusError(BraviaError):
    """The device answered with a non-200 HTTP status."""
    kind = ErrorKind.HTTP_STATUS

    method: str
    status: int
    raw_body: Optional[str]

    def __init__(self, method: str, status: int, raw_body: Optional[str]=None):
        super().__init__(f"{method}. Response error, status code: {status}.")
        self.method = method
        self.status = status
        self.raw_body = raw_body

class TransportError(BraviaError):
    """The request could not be completed (connection refused, DNS failure, timeout, ...).

    The underlying exception is chained as __cause__.
    """
    kind = ErrorKind.TRANSPORT

    method: str

    def __init__(self, method: str, msg: str):
        super().__init__(f"{method}. Request failed: {msg}")
        self.method = method

class ApplicationError(BraviaError):
    """The device decoded the request and reported an error of its own.

    For structured calls this is the `error: [code, message]` pair; for IRCC
    submissions it is the UPnP fault's errorCode/errorDescription.
    """
    kind = ErrorKind.APPLICATION

    method: str
    code: Optional[int]
    message: str
    status: Optional[int]

    def __init__(self, method: str, code: Optional[int], message: str, status: Optional[int]=None):
        super().__init__(message)
        self.method = method
        self.code = code
        self.message = message
        self.status = status

class MalformedResponseError(BraviaError):
    """A response body could not be decoded in the expected encoding."""
    kind = ErrorKind.MALFORMED_RESPONSE

    method: str
    raw_body: str
    status: Optional[int]

    def __init__(self, method: str, raw_body: str, status: Optional[int]=None, detail: Optional[str]=None):
        if detail is None:
            detail = "Unexpected or malformed response"
        super().__init__(f"{method}. {detail}: {raw_body}")
        self.method = method
        self.raw_body = raw_body
        self.status = status

class DiscoveryError(BraviaError):
    """SSDP discovery did not find a matching device."""
    kind = ErrorKind.DISCOVERY
