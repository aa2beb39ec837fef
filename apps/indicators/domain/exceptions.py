"""
Domain errors raised by indicator providers.
None of them is retried or recovered internally; they propagate to the caller.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    API_KEY_NOT_FOUND = "api_key_not_found"
    ENDPOINT_NOT_FOUND = "endpoint_not_found"
    CONNECTION_FAILURE = "connection_failure"
    REQUEST_FAILURE = "request_failure"
    INVALID_DATE = "invalid_date"


class SbifError(Exception):
    kind: ErrorKind


class ApiKeyNotFound(SbifError):
    kind = ErrorKind.API_KEY_NOT_FOUND

    def __init__(self):
        super().__init__("Api key not found")


class EndpointNotFound(SbifError):
    kind = ErrorKind.ENDPOINT_NOT_FOUND

    def __init__(self, endpoint: str, url: Optional[str] = None):
        self.endpoint = endpoint
        self.url = url
        super().__init__(f"Endpoint not found ({endpoint})")


class ConnectionFailure(SbifError):
    kind = ErrorKind.CONNECTION_FAILURE

    def __init__(self, endpoint: str, url: Optional[str] = None):
        self.endpoint = endpoint
        self.url = url
        super().__init__(f"Could not connect to SBIF API ({endpoint})")


class RequestFailure(SbifError):
    kind = ErrorKind.REQUEST_FAILURE

    def __init__(self, endpoint: str, cause: Exception, url: Optional[str] = None):
        self.endpoint = endpoint
        self.cause = cause
        self.url = url
        super().__init__(f"Request exception ({endpoint}): {cause.__class__.__name__}")


class InvalidDate(SbifError):
    kind = ErrorKind.INVALID_DATE

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid date: {value}")
