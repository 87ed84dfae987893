# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Chat completion wire models (OpenAI chat format).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


@dataclass
class Message:
    role: str
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


@dataclass
class ChatCompletionRequest:
    """Outbound completion request. None fields are left out of the payload."""
    model: str
    messages: List[Message]
    temperature: Optional[float] = None
    options: Optional[Dict[str, Any]] = None   # Ollama-style secondary options
    stream: bool = False
    n: int = 1

    def to_payload(self) -> dict:
        payload = {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "stream": self.stream,
            "n": self.n,
        }
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        if self.options is not None:
            payload["options"] = dict(self.options)
        return payload


@dataclass
class Choice:
    index: int
    message: Message
    finish_reason: str = ""


@dataclass
class ChatCompletionResponse:
    """Parsed completion response. Unknown fields are ignored."""
    id: str = ""
    model: str = ""
    choices: List[Choice] = field(default_factory=list)
    usage: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "ChatCompletionResponse":
        """
        Parse a decoded JSON body.

        Raises:
            ValueError: If data is not shaped like a chat completion
        """
        if not isinstance(data, dict):
            raise ValueError("completion response is not a JSON object")

        choices = []
        for i, raw in enumerate(data.get("choices") or []):
            if not isinstance(raw, dict):
                raise ValueError(f"choice {i} is not an object")
            message = raw.get("message") or {}
            if not isinstance(message, dict):
                raise ValueError(f"choice {i} message is not an object")
            choices.append(Choice(
                index=raw.get("index", i),
                message=Message(
                    role=message.get("role", ROLE_ASSISTANT),
                    content=message.get("content") or "",
                ),
                finish_reason=raw.get("finish_reason") or "",
            ))

        return cls(
            id=data.get("id") or "",
            model=data.get("model") or "",
            choices=choices,
            usage=data.get("usage") or {},
        )


def parse_models_list(data: dict) -> List[str]:
    """
    Extract model ids from a /v1/models style body.

    Ids are trimmed, blanks dropped, order kept.

    Raises:
        ValueError: If data is not shaped like a models list
    """
    if not isinstance(data, dict):
        raise ValueError("models response is not a JSON object")
    items = data.get("data") or []
    if not isinstance(items, list):
        raise ValueError("models response 'data' is not a list")

    ids = []
    for item in items:
        if not isinstance(item, dict):
            continue
        model_id = str(item.get("id") or "").strip()
        if model_id:
            ids.append(model_id)
    return ids
