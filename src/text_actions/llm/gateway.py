# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
LLM gateway: list models and request chat completions over HTTP.

Works with any OpenAI-compatible server (LM Studio, llama.cpp, OpenRouter,
OpenAI) and with Ollama's OpenAI-compatible endpoints.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Optional, Tuple, Union

import requests

from ..errors import UpstreamError
from ..utils import SERVICE_CHECK_TIMEOUT
from .models import ChatCompletionRequest, ChatCompletionResponse, parse_models_list

DEFAULT_CONNECT_TIMEOUT = 10  # Connection timeout in seconds when reads are unlimited

Timeout = Union[float, Tuple[float, None]]


class LLMGateway(ABC):
    """
    Abstract transport to an LLM server.

    Implementations raise UpstreamError for transport failures, non-2xx
    answers and undecodable bodies. They never retry.
    """

    @abstractmethod
    def list_models(self, base_url: str, endpoint: str, headers: Mapping[str, str]) -> List[str]:
        """Return the model ids the server advertises."""
        pass

    @abstractmethod
    def complete(
        self,
        base_url: str,
        endpoint: str,
        headers: Mapping[str, str],
        request: ChatCompletionRequest,
    ) -> ChatCompletionResponse:
        """Send one non-streaming chat completion."""
        pass

    def close(self) -> None:
        """Clean up resources when shutting down."""
        pass


def build_url(base_url: str, endpoint: str) -> str:
    """Join a base URL and an endpoint path with exactly one slash."""
    return base_url.strip().rstrip("/") + "/" + endpoint.strip().lstrip("/")


class HttpLLMGateway(LLMGateway):
    """LLMGateway over a pooled requests.Session."""

    def __init__(self, timeout: float = 0, check_timeout: float = SERVICE_CHECK_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self._session = session or requests.Session()
        self._timeout = timeout
        self._check_timeout = check_timeout

    def close(self) -> None:
        """Clean up resources."""
        try:
            self._session.close()
        except Exception:
            pass

    def list_models(self, base_url: str, endpoint: str, headers: Mapping[str, str]) -> List[str]:
        url = build_url(base_url, endpoint)
        data = self._send("GET", url, headers, None, self._check_timeout)
        try:
            models = parse_models_list(data)
        except ValueError as e:
            raise UpstreamError(f"unexpected models response from {url}: {e}") from e
        return models

    def complete(
        self,
        base_url: str,
        endpoint: str,
        headers: Mapping[str, str],
        request: ChatCompletionRequest,
    ) -> ChatCompletionResponse:
        url = build_url(base_url, endpoint)
        data = self._send("POST", url, headers, request.to_payload(), self._get_timeout(self._timeout))
        try:
            return ChatCompletionResponse.from_dict(data)
        except ValueError as e:
            raise UpstreamError(f"unexpected completion response from {url}: {e}") from e

    # ─────────────────────────────────────────────────────────────────
    # Private methods
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def _get_timeout(timeout_config: float) -> Timeout:
        """Timeout for requests: the configured value, or (connect, None) for unlimited read."""
        if timeout_config > 0:
            return timeout_config
        return (DEFAULT_CONNECT_TIMEOUT, None)

    def _send(self, method: str, url: str, headers: Mapping[str, str],
              payload: Optional[dict], timeout: Timeout) -> dict:
        request_headers: Dict[str, str] = {"Accept": "application/json"}
        if payload is not None:
            request_headers["Content-Type"] = "application/json"
        request_headers.update(headers)

        try:
            r = self._session.request(method, url, json=payload, headers=request_headers, timeout=timeout)
        except requests.exceptions.Timeout as e:
            raise UpstreamError(f"timeout calling {url}") from e
        except requests.exceptions.ConnectionError as e:
            raise UpstreamError(f"cannot connect to {url}") from e
        except requests.exceptions.RequestException as e:
            raise UpstreamError(f"request to {url} failed: {e}") from e

        if not 200 <= r.status_code < 300:
            raise UpstreamError(f"{method} {url} failed", status_code=r.status_code, body=r.text or "")

        try:
            return r.json()
        except ValueError as e:
            raise UpstreamError(f"invalid JSON from {url}", status_code=r.status_code, body=r.text or "") from e
