"""
Fetch Request - fluent builder for httpx requests.

Example:

    from fetch_request import RequestBuilder

    rb = RequestBuilder()
    request = (
        rb.host("localhost:8080")
        .path("/some/path")
        .set_value("name", "diego")
        .build()
    )

    with httpx.Client() as client:
        response = client.send(request)

or, letting the builder dispatch through a default client:

    response = RequestBuilder().host("localhost:8080").path("/ping").do()
"""

__version__ = "0.1.0"

from .config import ClientConfig, TimeoutConfig, create_client
from .core.request import RequestBuilder, encode_query
from .errors import RequestBuilderError, RequestBuildError

__all__ = [
    "RequestBuilder", "encode_query",
    "ClientConfig", "TimeoutConfig", "create_client",
    "RequestBuilderError", "RequestBuildError",
]
