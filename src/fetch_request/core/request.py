"""
Fluent builder for httpx.Request objects.
"""
import logging
import re
from typing import Iterable, Iterator, Optional, Union
from urllib.parse import quote

import httpx

from ..config import DEFAULT_METHOD, DEFAULT_SCHEME
from ..errors import RequestBuildError
from ..types import PayloadSource, QueryValues, UserInfo

logger = logging.getLogger(__name__)

# Constants
LOG_PREFIX = "[RequestBuilder]"
STREAM_CHUNK_SIZE = 64 * 1024

# RFC 7230 token
_METHOD_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")

# Path characters left unescaped; "?", "#", "%" and spaces are escaped
PATH_SAFE = "/:@$&+,;="


def encode_query(query: Optional[QueryValues]) -> str:
    """
    Form-encode query state.

    Keys come out sorted, values of a repeated key keep insertion order.
    """
    if not query:
        return ""
    items = [(key, value) for key in sorted(query) for value in query[key]]
    return str(httpx.QueryParams(items))


def redact_url(url: httpx.URL) -> str:
    """Mask the password part of a URL for logging."""
    if url.password:
        url = url.copy_with(password="REDACTED")
    return str(url)


def _iter_stream(stream) -> Iterator[bytes]:
    while True:
        chunk = stream.read(STREAM_CHUNK_SIZE)
        if not chunk:
            break
        yield chunk


class RequestBuilder:
    """
    Fluent builder for httpx.Request.

    Every setter mutates the builder in place and returns it, so calls can
    be chained in any order. Instances are not thread-safe; use one builder
    per request.
    """

    def __init__(self) -> None:
        self._method: str = ""
        self._scheme: str = ""
        self._host: str = ""
        self._path: str = ""
        self._user_info: Optional[UserInfo] = None
        self._query: Optional[QueryValues] = None
        self._headers: Optional[httpx.Headers] = None
        self._payload: Optional[Union[bytes, str, Iterable[bytes]]] = None

    def scheme(self, scheme: str) -> "RequestBuilder":
        """Set the url scheme. Defaults to 'http'."""
        self._scheme = scheme
        return self

    def host(self, host: str) -> "RequestBuilder":
        """Set the url host[:port]."""
        self._host = host
        return self

    def method(self, method: str) -> "RequestBuilder":
        """
        Set the request method. Defaults to GET, with or without a payload.
        """
        self._method = method
        return self

    def path(self, path: str) -> "RequestBuilder":
        """Set the url path. It is supposed to start with a slash (/)."""
        self._path = path
        return self

    def user_password(self, user: str, password: str) -> "RequestBuilder":
        """Set the user authentication part of the url."""
        self._user_info = (user, password)
        return self

    def payload(self, data: Optional[PayloadSource]) -> "RequestBuilder":
        """
        Set the request body.

        Bytes and str are sent as-is, binary file-like objects and byte
        iterables are streamed. The builder never reads the source itself.

        A file-like source is wrapped once, here: the first request built
        (and sent) consumes it, later builds get an empty body.
        """
        if isinstance(data, bytearray):
            data = bytes(data)
        elif data is not None and hasattr(data, "read"):
            data = _iter_stream(data)
        self._payload = data
        return self

    def set_header(self, key: str, value: str) -> "RequestBuilder":
        """Set header `key` to `value`, replacing any existing values."""
        if self._headers is None:
            self._headers = httpx.Headers()
        self._headers[key] = value
        return self

    def add_header(self, key: str, value: str) -> "RequestBuilder":
        """Append `value` to header `key`, keeping existing values."""
        raw = self._headers.raw if self._headers is not None else []
        self._headers = httpx.Headers([*raw, (key.encode(), value.encode())])
        return self

    def set_value(self, key: str, value: str) -> "RequestBuilder":
        """Set query `key` to `value`. If key exists, it is replaced."""
        if self._query is None:
            self._query = {}
        self._query[key] = [value]
        return self

    def add_value(self, key: str, value: str) -> "RequestBuilder":
        """
        Add a value to query `key`. The key is repeated on the resulting
        querystring.
        """
        if self._query is None:
            self._query = {}
        self._query.setdefault(key, []).append(value)
        return self

    def del_value(self, key: str) -> "RequestBuilder":
        """Remove `key` and all its values from the querystring."""
        if self._query is not None:
            self._query.pop(key, None)
        return self

    def values(self) -> str:
        """
        Return the encoded querystring that will be used to form the request.
        Empty when no query value was ever set.
        """
        return encode_query(self._query)

    def _url(self, redact: bool = False) -> str:
        userinfo = ""
        if self._user_info is not None:
            user, password = self._user_info
            if redact:
                password = "REDACTED"
            userinfo = f"{quote(user, safe='')}:{quote(password, safe='')}@"
        path = quote(self._path, safe=PATH_SAFE)
        url = f"{self._scheme or DEFAULT_SCHEME}://{userinfo}{self._host}{path}"
        raw_query = encode_query(self._query)
        if raw_query:
            url = f"{url}?{raw_query}"
        return url

    def build(self) -> httpx.Request:
        """
        Create an httpx.Request from the collected settings.

        Raises:
            RequestBuildError: the method or the assembled url is rejected.
        """
        method = self._method or DEFAULT_METHOD
        url = self._url()

        if not _METHOD_TOKEN.fullmatch(method):
            logger.error(f"{LOG_PREFIX} Invalid method: {method!r}")
            raise RequestBuildError(method, self._url(redact=True), ValueError(f"invalid method {method!r}"))

        try:
            request = httpx.Request(method, url, headers=self._headers, content=self._payload)
        except (httpx.InvalidURL, ValueError, TypeError) as e:
            logger.error(f"{LOG_PREFIX} Build failed: {e}")
            raise RequestBuildError(method, self._url(redact=True), e) from e

        # httpx upper-cases the method; keep the token as given
        request.method = method

        logger.debug(f"{LOG_PREFIX} Built: {request.method} {redact_url(request.url)}")
        return request

    def do(self, client: Optional[httpx.Client] = None) -> httpx.Response:
        """
        Build the request and send it.

        Without a client a default httpx.Client is created for this call
        only. A given client is left open.
        """
        request = self.build()

        if client is not None:
            return self._send(client, request)

        with httpx.Client() as own_client:
            return self._send(own_client, request)

    def _send(self, client: httpx.Client, request: httpx.Request) -> httpx.Response:
        logger.debug(f"{LOG_PREFIX} Request: {request.method} {redact_url(request.url)}")
        try:
            return client.send(request)
        except httpx.TransportError as e:
            logger.error(f"{LOG_PREFIX} Request failed: {e}")
            raise e

    def __repr__(self) -> str:
        method = self._method or DEFAULT_METHOD
        return f"<RequestBuilder {method} {self._url(redact=True)!r}>"
