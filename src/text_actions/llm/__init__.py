"""
LLM transport for Text Actions.

Usage:
    from text_actions.llm import HttpLLMGateway, ChatCompletionRequest, Message

    gateway = HttpLLMGateway(timeout=60)
    models = gateway.list_models("http://127.0.0.1:1234/", "/v1/models", {})
"""

from .gateway import HttpLLMGateway, LLMGateway, build_url
from .models import (
    ROLE_ASSISTANT,
    ROLE_SYSTEM,
    ROLE_USER,
    ChatCompletionRequest,
    ChatCompletionResponse,
    Choice,
    Message,
    parse_models_list,
)

__all__ = [
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "Choice",
    "HttpLLMGateway",
    "LLMGateway",
    "Message",
    "ROLE_ASSISTANT",
    "ROLE_SYSTEM",
    "ROLE_USER",
    "build_url",
    "parse_models_list",
]
