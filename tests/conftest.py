"""Shared test fixtures."""

from __future__ import annotations

import json
import logging
import socket
import threading
from collections.abc import Callable, Iterator
from typing import Any, TypeAlias
from unittest.mock import MagicMock

import pytest

CHAT_RESPONSE: dict[str, Any] = {
    "id": "chatcmpl-123",
    "object": "chat.completion",
    "model": "o1-mini-2024-09-12",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "Hello there!"},
            "finish_reason": "stop",
        }
    ],
    "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
}


class MockResponse:
    """Mimics a streamed ``requests.Response`` for testing post_json."""

    def __init__(
        self,
        json_data: dict[str, Any] | None = None,
        status_code: int = 200,
        text: str = "",
        chunks: list[bytes] | None = None,
    ) -> None:
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self.encoding: str | None = "utf-8"
        if chunks is not None:
            self._chunks = chunks
        elif json_data is not None:
            self._chunks = [json.dumps(json_data).encode()]
        else:
            self._chunks = [text.encode()]

    def iter_content(self, chunk_size: int = 1, **_kwargs: object) -> Iterator[bytes]:
        yield from self._chunks

    def __enter__(self) -> MockResponse:
        return self

    def __exit__(self, *args: object) -> None:
        pass


@pytest.fixture
def mock_post(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Monkeypatch ``requests.post`` and return the mock."""
    mock = MagicMock()
    monkeypatch.setattr("requests.post", mock)
    return mock


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers bound to a test's captured stderr."""
    yield
    logger = logging.getLogger("pipeask")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def api_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """A minimal environment for reaching the completion service."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    for var in ("OPENAI_BASE_URL", "OPENAI_ORG_ID", "OPENAI_PROJECT_ID"):
        monkeypatch.delenv(var, raising=False)


ServerFactory: TypeAlias = Callable[[bytes, bytes, float], str]


@pytest.fixture
def slow_server(monkeypatch: pytest.MonkeyPatch) -> Iterator[ServerFactory]:
    """Start local HTTP servers that write ``head`` at once, then ``tail`` a byte per ``delay``.

    Returns the chat completions URL of the started server.
    """
    for var in ("HTTP_PROXY", "http_proxy", "ALL_PROXY", "all_proxy"):
        monkeypatch.delenv(var, raising=False)
    stop = threading.Event()
    started: list[tuple[socket.socket, threading.Thread]] = []

    def start(head: bytes, tail: bytes, delay: float) -> str:
        srv = socket.create_server(("127.0.0.1", 0))
        srv.settimeout(5)

        def serve() -> None:
            try:
                conn, _ = srv.accept()
            except OSError:
                return
            with conn:
                try:
                    conn.recv(65536)
                    conn.sendall(head)
                    for i in range(len(tail)):
                        if stop.wait(delay):
                            return
                        conn.sendall(tail[i : i + 1])
                except OSError:
                    return

        thread = threading.Thread(target=serve, daemon=True)
        thread.start()
        started.append((srv, thread))
        host, port = srv.getsockname()[:2]
        return f"http://{host}:{port}/v1/chat/completions"

    yield start
    stop.set()
    for srv, thread in started:
        thread.join(timeout=5)
        srv.close()


def http_response(body: bytes, status: str = "200 OK") -> tuple[bytes, bytes]:
    """Split a raw HTTP/1.1 response into its header block and body."""
    head = (
        f"HTTP/1.1 {status}\r\n"
        "Content-Type: application/json\r\n"
        f"Content-Length: {len(body)}\r\n"
        "Connection: close\r\n\r\n"
    ).encode()
    return head, body
