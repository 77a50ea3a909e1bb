"""Exceptions for completion service errors."""

from __future__ import annotations

from typing import Any

from pipeask._exceptions import PipeaskError


class APIError(PipeaskError):
    """Raised when the completion service returns an HTTP error or an unreadable body."""

    def __init__(self, status_code: int, body: dict[str, Any] | str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP {status_code}: {body}")


class MalformedResponseError(PipeaskError):
    """Raised when a successful response does not have the Chat Completions shape."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"malformed response: {detail}")


class TransportError(PipeaskError):
    """Raised when the request never produced an HTTP response."""


class CompletionTimeoutError(TransportError):
    """Raised when the request outlives its time budget."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"request timed out after {timeout:g}s")


class EmptyResponseError(PipeaskError):
    """Raised when a completion response carries no choices."""
