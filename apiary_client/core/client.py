"""
Core HTTP client for the Apiary API.

Handles authentication headers, request/response, status checks and error handling.
"""

import enum
import http.client
import json
import logging
import os
import re
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Any, Protocol

logger = logging.getLogger(__name__)

# Configuration
DEFAULT_BASE_URL = "https://api.apiary.io/"

READ_CHUNK_SIZE = 64 * 1024

# RFC 7230 token characters
_METHOD_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


# =============================================================================
# Errors
# =============================================================================


class ErrorKind(enum.Enum):
    """Kinds of failure a request can end in."""

    REQUEST_CONSTRUCTION = "request_construction"
    TRANSPORT = "transport"
    BODY_READ = "body_read"
    EMPTY_RESPONSE = "empty_response"
    UNEXPECTED_STATUS = "unexpected_status"
    DECODE = "decode"
    PUBLISH_REJECTED = "publish_rejected"


class ApiaryError(Exception):
    """Base error class for Apiary client errors."""

    kind: ErrorKind

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result: dict[str, Any] = {"error": self.message, "kind": self.kind.value}
        if self.details:
            result["details"] = self.details
        return result


class RequestConstructionError(ApiaryError):
    """Method, URL or headers do not form a valid request. Raised before any network activity."""

    kind = ErrorKind.REQUEST_CONSTRUCTION


class TransportError(ApiaryError):
    """Network-level failure (DNS, refused connection, TLS, timeout)."""

    kind = ErrorKind.TRANSPORT


class BodyReadError(ApiaryError):
    """Reading the response body failed partway."""

    kind = ErrorKind.BODY_READ


class EmptyResponseError(ApiaryError):
    """The response body was empty."""

    kind = ErrorKind.EMPTY_RESPONSE


class UnexpectedStatusError(ApiaryError):
    """Status code outside the operation's accepted set."""

    kind = ErrorKind.UNEXPECTED_STATUS

    def __init__(self, message: str, status: int = 0, status_line: str = "", details: dict | None = None):
        super().__init__(message, details)
        self.status = status
        self.status_line = status_line

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result = super().to_dict()
        if self.status:
            result["status"] = self.status
        return result


class DecodeError(ApiaryError):
    """Response body is not JSON of the expected shape."""

    kind = ErrorKind.DECODE


class PublishRejectedError(ApiaryError):
    """The service refused a blueprint publish."""

    kind = ErrorKind.PUBLISH_REJECTED

    def __init__(self, message: str, remote_message: str = "", details: dict | None = None):
        super().__init__(message, details)
        self.remote_message = remote_message


# =============================================================================
# Authorization
# =============================================================================


class AuthScheme(enum.Enum):
    """
    Authorization header variants.

    The current endpoints (user info, api listing) take a bearer token in
    ``Authorization``; the blueprint endpoints still expect the legacy
    ``Authentication: Token ...`` header.
    """

    MODERN = "modern"
    LEGACY = "legacy"


def bearer_token(token: str) -> str:
    """Header value for the modern scheme."""
    return "bearer " + token


def legacy_token(token: str) -> str:
    """Header value for the legacy scheme."""
    return "Token " + token


def auth_headers(scheme: AuthScheme, token: str) -> dict[str, str]:
    """Build the authorization header for the given scheme."""
    if scheme is AuthScheme.LEGACY:
        return {"Authentication": legacy_token(token)}
    return {"Authorization": bearer_token(token)}


# =============================================================================
# Transport
# =============================================================================


class Opener(Protocol):
    """What the client needs from a transport: ``urllib.request.OpenerDirector`` fits."""

    def open(self, fullurl: Any, data: Any = ..., timeout: Any = ...) -> Any: ...


@dataclass
class Response:
    """A fully read HTTP response."""

    status: int
    reason: str
    body: bytes
    content_length: int | None = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def status_line(self) -> str:
        """Status code and reason, e.g. ``200 OK``."""
        return f"{self.status} {self.reason}".strip()

    def json(self) -> Any:
        """Decode the body as JSON."""
        try:
            return json.loads(self.body)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DecodeError(f"Invalid JSON response: {e}") from e


def _content_length(headers: Any) -> int | None:
    value = headers.get("Content-Length") if headers is not None else None
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def read_body(response: Any, content_length: int | None = None) -> bytes:
    """
    Read an entire response body.

    The declared content length is only a capacity hint: reading always
    continues until the stream is exhausted.

    Raises:
        BodyReadError: If the underlying read fails
        EmptyResponseError: If no bytes were read

    """
    buf = bytearray()
    try:
        while True:
            chunk = response.read(READ_CHUNK_SIZE)
            if not chunk:
                break
            buf += chunk
    except (OSError, http.client.HTTPException, ValueError) as e:
        raise BodyReadError(str(e), details={"content_length": content_length}) from e

    if not buf:
        raise EmptyResponseError("Empty response", details={"content_length": content_length})

    return bytes(buf)


def check_status(response: Response, expected: int = 200) -> None:
    """Raise UnexpectedStatusError unless the response has the expected status."""
    if response.status != expected:
        logger.warning("Unexpected status %s (expected %s)", response.status_line, expected)
        raise UnexpectedStatusError(
            f"Bad response code: {response.status_line}",
            status=response.status,
            status_line=response.status_line,
        )


class APIClient:
    """
    Low-level HTTP client for the Apiary API.

    Handles:
    - Authorization headers (modern bearer and legacy token schemes)
    - Executing exactly one request per call, never retried
    - Reading and classifying response bodies
    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        opener: Opener | None = None,
    ):
        """
        Initialize the API client.

        Args:
            token: Apiary API token (or APIARY_TOKEN env var)
            base_url: API base URL (or APIARY_BASE_URL env var)
            timeout: Request timeout in seconds; None leaves the transport default
            opener: Transport handle, defaults to urllib's standard opener

        """
        if token is None:
            token = os.environ.get("APIARY_TOKEN", "")
        self._token = token
        self._base_url = (base_url or os.environ.get("APIARY_BASE_URL") or DEFAULT_BASE_URL).rstrip("/") + "/"
        self._timeout = timeout
        self._opener = opener if opener is not None else urllib.request.build_opener()

    @property
    def token(self) -> str:
        """Get the API token."""
        return self._token

    @property
    def base_url(self) -> str:
        """Get the API base URL, always ending in a slash."""
        return self._base_url

    @property
    def timeout(self) -> float | None:
        """Get the request timeout in seconds (None for the transport default)."""
        return self._timeout

    def _build_url(self, path: str) -> str:
        """Build full URL from path."""
        return self._base_url + path.lstrip("/")

    def _build_request(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        body: bytes | None,
    ) -> urllib.request.Request:
        if not isinstance(method, str) or not _METHOD_RE.match(method):
            raise RequestConstructionError(f"Invalid method {method!r}")

        url = self._build_url(path)
        if not url.isascii() or any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
            raise RequestConstructionError(f"Invalid URL {url!r}")

        try:
            req = urllib.request.Request(url, data=body, method=method)
        except ValueError as e:
            raise RequestConstructionError(f"Invalid URL {url!r}: {e}") from e

        for key, value in headers.items():
            if not _METHOD_RE.match(key):
                raise RequestConstructionError(f"Invalid header name {key!r}")
            # Sent latin-1 encoded; never echo the value, it may be the token
            if any(ord(ch) > 0xFF or (ord(ch) < 0x20 and ch != "\t") or ord(ch) == 0x7F for ch in value):
                raise RequestConstructionError(f"Invalid value for header {key!r}")
            req.add_header(key, value)
        return req

    def execute(
        self,
        method: str,
        path: str,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """
        Execute a single HTTP request.

        Args:
            method: HTTP method (GET, POST)
            path: API path relative to the base URL (e.g., me/apis)
            headers: Request headers
            body: Request body for POST

        Returns:
            The response with its full body. Any status code is returned as-is.

        Raises:
            RequestConstructionError: Malformed method, URL or header
            TransportError: Network failure
            BodyReadError: Body read failed
            EmptyResponseError: Zero-byte body

        """
        req = self._build_request(method, path, headers or {}, body)
        logger.debug("%s %s", method, req.full_url)

        try:
            if self._timeout is None:
                raw = self._opener.open(req)
            else:
                raw = self._opener.open(req, timeout=self._timeout)
        except urllib.error.HTTPError as e:
            # Error statuses still carry a body worth reading
            raw = e
        except urllib.error.URLError as e:
            logger.warning("Connection error for %s %s: %s", method, req.full_url, e.reason)
            raise TransportError(f"Connection error: {e.reason}") from e
        except TimeoutError as e:
            logger.warning("Request timed out: %s %s", method, req.full_url)
            raise TransportError(f"Request timed out after {self._timeout} seconds") from e
        except ValueError as e:
            # Raised by http.client's local request validation and encoding; may quote the token
            raise RequestConstructionError(f"Invalid request: {type(e).__name__}") from e
        except (OSError, http.client.HTTPException) as e:
            logger.warning("Transport error for %s %s: %s", method, req.full_url, e)
            raise TransportError(f"Connection error: {e}") from e

        try:
            raw_headers = raw.headers
            content_length = _content_length(raw_headers)
            try:
                data = read_body(raw, content_length)
            except BodyReadError as e:
                logger.warning("Failed reading response body for %s %s: %s", method, req.full_url, e)
                raise
            status = raw.getcode()
            reason = raw.reason or ""
        finally:
            raw.close()

        response = Response(
            status=status,
            reason=str(reason),
            body=data,
            content_length=content_length,
            headers=dict(raw_headers.items()) if raw_headers is not None else {},
        )
        logger.debug("%s %s -> %s (%d bytes)", method, req.full_url, response.status_line, len(data))
        return response

    # =========================================================================
    # HTTP Methods
    # =========================================================================

    def get(self, path: str, scheme: AuthScheme = AuthScheme.MODERN) -> Response:
        """Make an authorized GET request."""
        return self.execute("GET", path, auth_headers(scheme, self._token))

    def post(self, path: str, data: dict[str, Any], scheme: AuthScheme = AuthScheme.MODERN) -> Response:
        """Make an authorized POST request with a JSON body."""
        headers = auth_headers(scheme, self._token)
        headers["Content-Type"] = "application/json; charset=utf-8"
        body = json.dumps(data).encode("utf-8")
        return self.execute("POST", path, headers, body)
