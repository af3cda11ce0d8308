from __future__ import annotations
from typing import Callable, Dict, List, Optional

import httpx
import pytest

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24


class Recorder:
    """MockTransport handler that records requests and answers with a canned response."""

    def __init__(self, status: int, content: bytes, headers: Optional[Dict[str, str]]) -> None:
        self.status = status
        self.content = content
        self.headers = headers or {}
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, content=self.content, headers=self.headers)


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def make_transport() -> Callable[..., tuple]:
    def _make(status: int = 200, content: bytes = PNG_BYTES, headers: Optional[Dict[str, str]] = None):
        recorder = Recorder(status, content, headers)
        return httpx.MockTransport(recorder), recorder

    return _make
