"""Client for the Chat Completions endpoint."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from pipeask.llm._exceptions import MalformedResponseError
from pipeask.llm._http import post_json
from pipeask.llm._types import Choice, Message, Response, Usage

if TYPE_CHECKING:
    from pipeask._config import Settings

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "o1-mini"
DEFAULT_TIMEOUT = 60.0
COMPLETIONS_PATH = "/chat/completions"


def _expect(value: Any, kind: type | tuple[type, ...], where: str) -> Any:
    if not isinstance(value, kind):
        raise MalformedResponseError(f"{where} has type {type(value).__name__}")
    return value


def _parse_choice(raw: Any, position: int) -> Choice:
    where = f"choices[{position}]"
    _expect(raw, dict, where)
    message = _expect(raw.get("message") or {}, dict, f"{where}.message")
    return Choice(
        index=_expect(raw.get("index", position), int, f"{where}.index"),
        message=Message(
            role=_expect(message.get("role", "assistant"), str, f"{where}.message.role"),
            content=_expect(message.get("content") or "", str, f"{where}.message.content"),
        ),
        finish_reason=_expect(raw.get("finish_reason") or "", str, f"{where}.finish_reason"),
    )


def _parse_response(raw: dict[str, Any]) -> Response:
    raw_choices = _expect(raw.get("choices") or [], list, "choices")
    choices = tuple(_parse_choice(c, i) for i, c in enumerate(raw_choices))

    raw_usage = _expect(raw.get("usage") or {}, dict, "usage")
    usage = Usage(
        input_tokens=_expect(raw_usage.get("prompt_tokens", 0), int, "usage.prompt_tokens"),
        output_tokens=_expect(
            raw_usage.get("completion_tokens", 0), int, "usage.completion_tokens"
        ),
        total_tokens=_expect(raw_usage.get("total_tokens", 0), int, "usage.total_tokens"),
    )

    return Response(
        id=_expect(raw.get("id") or "", str, "id"),
        model=_expect(raw.get("model") or "", str, "model"),
        choices=choices,
        usage=usage,
        raw=raw,
    )


class Client:
    """Blocking client for one OpenAI-compatible Chat Completions API.

    Usage::

        from pipeask import Client, Settings

        client = Client(Settings.from_env())
        response = client.chat("Hello!")
        print(response.text)
    """

    def __init__(
        self,
        settings: Settings,
        *,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._url = settings.base_url + COMPLETIONS_PATH
        self._headers = settings.headers()
        self._model = model
        self._timeout = timeout

    @property
    def model(self) -> str:
        return self._model

    @staticmethod
    def _normalize_input(
        prompt_or_messages: str | Sequence[dict[str, str] | Message],
    ) -> list[Message]:
        if isinstance(prompt_or_messages, str):
            return [Message(role="user", content=prompt_or_messages)]
        return [
            m if isinstance(m, Message) else Message(role=m["role"], content=m["content"])
            for m in prompt_or_messages
        ]

    def _build_payload(self, messages: list[Message]) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }

    def chat(self, prompt_or_messages: str | Sequence[dict[str, str] | Message]) -> Response:
        """Send one chat request and return the parsed response."""
        messages = self._normalize_input(prompt_or_messages)
        payload = self._build_payload(messages)
        raw = post_json(self._url, self._headers, payload, timeout=self._timeout)
        response = _parse_response(raw)
        logger.debug(
            "completion %s from %s: %d choice(s), tokens in=%d out=%d",
            response.id or "<no id>",
            response.model or self._model,
            len(response.choices),
            response.usage.input_tokens,
            response.usage.output_tokens,
        )
        return response
