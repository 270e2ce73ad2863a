"""Pytest configuration - loads .env for integration tests and provides a fake transport."""

import io
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


class FakeResponse:
    """Stands in for http.client.HTTPResponse."""

    def __init__(
        self,
        body: bytes = b"",
        status: int = 200,
        reason: str = "OK",
        headers: dict[str, str] | None = None,
        read_error: Exception | None = None,
    ):
        self._stream = io.BytesIO(body)
        self._status = status
        self.reason = reason
        self.headers = headers if headers is not None else {"Content-Length": str(len(body))}
        self._read_error = read_error
        self.closed = False

    def getcode(self) -> int:
        return self._status

    def read(self, amt: int = -1) -> bytes:
        if self._read_error is not None:
            raise self._read_error
        return self._stream.read(amt)

    def close(self) -> None:
        self.closed = True


class FakeOpener:
    """Records every request and answers with canned responses (or raises)."""

    def __init__(self, handler: Callable[[Any], Any] | None = None):
        self.requests: list[Any] = []
        self.timeouts: list[Any] = []
        self._handler = handler

    def open(self, request: Any, timeout: Any = None) -> Any:
        self.requests.append(request)
        self.timeouts.append(timeout)
        if self._handler is None:
            raise AssertionError(f"transport must not be invoked: {request.full_url}")
        result = self._handler(request)
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def last(self) -> Any:
        return self.requests[-1]


def json_response(body: str, status: int = 200, reason: str = "OK") -> FakeResponse:
    return FakeResponse(body.encode("utf-8"), status=status, reason=reason)


@pytest.fixture
def make_opener() -> Callable[..., FakeOpener]:
    """Build a FakeOpener answering every request with the same response."""

    def _make(response: Any = None) -> FakeOpener:
        if response is None:
            return FakeOpener()
        return FakeOpener(lambda request: response)

    return _make
