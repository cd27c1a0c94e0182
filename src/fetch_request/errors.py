"""
Exceptions raised by fetch-request.
"""
from typing import Optional


class RequestBuilderError(Exception):
    """Base exception for request builder errors."""
    pass


class RequestBuildError(RequestBuilderError):
    def __init__(self, method: str, url: str, cause: Optional[Exception] = None):
        msg = f"Cannot build {method} request for '{url}'"
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)
        self.method = method
        self.url = url
        self.cause = cause
