"""OpenAI-compatible LLM transport: a single `send(conversation, config)` call."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from research_agent.config import settings
from research_agent.exceptions import LLMError
from research_agent.services.env_safety import sanitize_ssl_keylogfile

OLLAMA_PLACEHOLDER_KEY = "ollama"


@dataclass
class Usage:
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class TextBlock:
    text: str
    type: str = "text"


@dataclass
class ToolUseBlock:
    id: str
    name: str
    input: dict[str, Any]
    type: str = "tool_use"


@dataclass
class MessageResponse:
    content: list[Any]
    usage: Usage = field(default_factory=Usage)

    @property
    def text_blocks(self) -> list[str]:
        return [b.text for b in self.content if getattr(b, "type", None) == "text"]


@dataclass
class Message:
    role: str
    content: str
    name: str | None = None

    def to_openai(self) -> dict[str, Any]:
        msg: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.name:
            msg["name"] = self.name
        return msg


@dataclass
class LLMConfig:
    """Model invocation settings. Unset fields fall back to backend defaults."""

    model: str
    temperature: float | None = None
    max_tokens: int | None = None
    stop_sequences: list[str] | None = None

    def to_openai_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"model": self.model}
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        if self.max_tokens is not None:
            kwargs["max_tokens"] = self.max_tokens
        if self.stop_sequences:
            kwargs["stop"] = self.stop_sequences
        return kwargs


def from_openai_response(response: Any) -> MessageResponse:
    choices = getattr(response, "choices", None) or []
    if not choices:
        raise LLMError("LLM response contained no choices")

    choice = choices[0].message
    content: list[Any] = []

    text = getattr(choice, "content", None)
    if text:
        content.append(TextBlock(text=text))

    for tc in getattr(choice, "tool_calls", []) or []:
        args = getattr(tc.function, "arguments", "{}") or "{}"
        try:
            parsed_args = json.loads(args)
        except json.JSONDecodeError:
            parsed_args = {}
        content.append(ToolUseBlock(id=tc.id, name=tc.function.name, input=parsed_args))

    usage = getattr(response, "usage", None)
    mapped_usage = Usage(
        input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
        output_tokens=getattr(usage, "completion_tokens", 0) or 0,
    )
    return MessageResponse(content=content, usage=mapped_usage)


def get_client() -> AsyncOpenAI:
    """Build the OpenAI-compatible client, preferring a configured Ollama server."""
    sanitize_ssl_keylogfile()
    ollama_base_url = settings.ollama_base_url.strip()
    if ollama_base_url:
        return AsyncOpenAI(
            api_key=settings.llm_api_key or OLLAMA_PLACEHOLDER_KEY,
            base_url=f"{ollama_base_url.rstrip('/')}/v1",
        )
    return AsyncOpenAI(
        api_key=settings.llm_api_key,
        base_url=settings.llm_base_url.strip() or "https://openrouter.ai/api/v1",
    )


_client: AsyncOpenAI | None = None


def client() -> AsyncOpenAI:
    """Get or create the LLM client."""
    global _client
    if _client is None:
        _client = get_client()
    return _client


async def send(conversation: list[Message], config: LLMConfig) -> MessageResponse:
    """Send a conversation to the model, raising LLMError on failure."""
    kwargs = config.to_openai_kwargs()
    kwargs["messages"] = [message.to_openai() for message in conversation]
    try:
        response = await client().chat.completions.create(**kwargs)
    except OpenAIError as exc:
        raise LLMError(f"{type(exc).__name__}: {exc}") from exc
    return from_openai_response(response)
