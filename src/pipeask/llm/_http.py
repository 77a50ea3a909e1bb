"""Thin HTTP helper around ``requests``."""

from __future__ import annotations

import contextlib
import json
import logging
import threading
from dataclasses import dataclass
from typing import Any

import requests

from pipeask.llm._exceptions import APIError, CompletionTimeoutError, TransportError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 8192


@dataclass(slots=True)
class _Exchange:
    """State shared between the caller and the thread performing the request."""

    response: requests.Response | None = None
    raw: bytes = b""
    error: Exception | None = None


def _perform(
    exchange: _Exchange,
    url: str,
    headers: dict[str, str],
    payload: dict[str, Any],
    timeout: float,
) -> None:
    try:
        with requests.post(
            url, headers=headers, json=payload, stream=True, timeout=timeout
        ) as r:
            exchange.response = r
            exchange.raw = b"".join(r.iter_content(chunk_size=_CHUNK_SIZE))
    except Exception as exc:
        exchange.error = exc


def _decode_body(r: requests.Response, raw: bytes) -> dict[str, Any] | str:
    text = raw.decode(r.encoding or "utf-8", errors="replace")
    try:
        body = json.loads(text)
    except ValueError:
        return text
    return body if isinstance(body, dict) else text


def _raise_for_status(r: requests.Response, body: dict[str, Any] | str) -> None:
    if not r.ok:
        raise APIError(r.status_code, body)
    if not isinstance(body, dict):
        raise APIError(r.status_code, f"expected a JSON object, got: {body!r}")


def post_json(
    url: str,
    headers: dict[str, str],
    payload: dict[str, Any],
    timeout: float = 60,
) -> dict[str, Any]:
    """POST JSON and return the parsed object, raising on any failure.

    ``timeout`` bounds the whole call: connecting, waiting for the status line
    and reading the body. ``requests`` only bounds single socket operations,
    so the exchange runs on a daemon thread that the caller stops waiting for
    once the budget is spent.
    """
    logger.debug("POST %s (timeout %ss)", url, timeout)
    exchange = _Exchange()
    worker = threading.Thread(
        target=_perform,
        args=(exchange, url, headers, payload, timeout),
        name="pipeask-request",
        daemon=True,
    )
    worker.start()
    worker.join(timeout)

    if worker.is_alive():
        if exchange.response is not None:
            # Unblocks the worker's read and drops the connection.
            with contextlib.suppress(OSError):
                exchange.response.close()
        raise CompletionTimeoutError(timeout)

    if isinstance(exchange.error, requests.Timeout):
        raise CompletionTimeoutError(timeout) from exchange.error
    if isinstance(exchange.error, requests.RequestException):
        raise TransportError(str(exchange.error)) from exchange.error
    if exchange.error is not None:
        raise exchange.error

    r = exchange.response
    assert r is not None
    body = _decode_body(r, exchange.raw)
    logger.debug("HTTP %s, %d bytes", r.status_code, len(exchange.raw))
    _raise_for_status(r, body)
    return body  # type: ignore[return-value]
