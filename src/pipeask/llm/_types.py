"""Typed values exchanged with the completion service."""

from __future__ import annotations

from dataclasses import dataclass, field

from pipeask.llm._exceptions import EmptyResponseError


@dataclass(frozen=True, slots=True)
class Message:
    """A chat message."""

    role: str
    content: str = ""


@dataclass(frozen=True, slots=True)
class Choice:
    """One candidate completion."""

    index: int
    message: Message
    finish_reason: str = ""


@dataclass(frozen=True, slots=True)
class Usage:
    """Token usage counts."""

    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0


@dataclass(frozen=True, slots=True)
class Response:
    """A parsed chat completion."""

    id: str = ""
    model: str = ""
    choices: tuple[Choice, ...] = ()
    usage: Usage = field(default_factory=Usage)
    raw: dict[str, object] = field(default_factory=dict)

    @property
    def text(self) -> str:
        """Content of the first choice, or ``""`` when there is none."""
        if not self.choices:
            return ""
        return self.choices[0].message.content

    def first_choice(self) -> Choice:
        if not self.choices:
            raise EmptyResponseError(f"response {self.id or '<no id>'} contained no choices")
        return self.choices[0]
