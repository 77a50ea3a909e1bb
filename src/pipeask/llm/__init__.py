"""LLM client — a blocking Chat Completions client."""

from pipeask._exceptions import ConfigError, InputError, PipeaskError
from pipeask.llm._client import DEFAULT_MODEL, DEFAULT_TIMEOUT, Client
from pipeask.llm._exceptions import (
    APIError,
    CompletionTimeoutError,
    EmptyResponseError,
    MalformedResponseError,
    TransportError,
)
from pipeask.llm._types import Choice, Message, Response, Usage

__all__ = [
    "DEFAULT_MODEL",
    "DEFAULT_TIMEOUT",
    "APIError",
    "Choice",
    "Client",
    "CompletionTimeoutError",
    "ConfigError",
    "EmptyResponseError",
    "InputError",
    "MalformedResponseError",
    "Message",
    "PipeaskError",
    "Response",
    "TransportError",
    "Usage",
]
