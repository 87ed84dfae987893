# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Completion orchestrator: turn an ActionRequest into a cleaned model answer.

The pipeline is linear. Each step either hands its result to the next or
raises, tagging the error with the step that failed:

    resolve prompt -> resolve system prompt -> validate request ->
    load settings -> check provider -> build prompt ->
    (same-language short-circuit | check models -> completion -> sanitize)

A same-language translation never reaches the network. Nothing is retried
and nothing is persisted.
"""

import time
from typing import Callable, Optional

from .actions import ActionRequest, validate_action_request
from .errors import (
    ActionError,
    EmptyResponseError,
    MisconfiguredProviderError,
    NilRequestError,
    NotFoundError,
    SettingsError,
    UpstreamError,
    ValidationError,
)
from .llm import ROLE_SYSTEM, ROLE_USER, ChatCompletionRequest, LLMGateway, Message
from .prompts import PromptRegistry, build_user_prompt
from .sanitizer import sanitize
from .settings import Settings, SettingsService
from .utils import Logger, NullLogger, is_blank

# Step names carried by errors raised from process_action
STEP_REQUEST = "validate request"
STEP_PROMPT = "resolve prompt"
STEP_SYSTEM_PROMPT = "resolve system prompt"
STEP_SETTINGS = "load settings"
STEP_PROVIDER = "check provider"
STEP_MODELS = "check models"
STEP_BUILD = "build prompt"
STEP_COMPLETE = "completion"


def build_chat_completion_request(settings: Settings, system_prompt: str, user_prompt: str) -> ChatCompletionRequest:
    """
    Assemble the outbound request for the active model.

    Temperature is only sent when enabled; Ollama providers also get it in
    the options object, which is where Ollama reads it from.
    """
    model = settings.model_config
    request = ChatCompletionRequest(
        model=model.model_name,
        messages=[
            Message(role=ROLE_SYSTEM, content=system_prompt),
            Message(role=ROLE_USER, content=user_prompt),
        ],
        stream=False,
        n=1,
    )
    if model.is_temperature_enabled:
        request.temperature = model.temperature
        if settings.current_provider.is_ollama:
            request.options = {"temperature": model.temperature}
    return request


class CompletionOrchestrator:
    """Runs the action pipeline against injected collaborators."""

    def __init__(
        self,
        registry: PromptRegistry,
        settings: SettingsService,
        gateway: LLMGateway,
        logger: Optional[Logger] = None,
        sanitizer: Callable[[str], str] = sanitize,
    ):
        self._registry = registry
        self._settings = settings
        self._gateway = gateway
        self._logger = logger or NullLogger()
        self._sanitize = sanitizer

    def process_action(self, request: Optional[ActionRequest]) -> str:
        """
        Run one action request through the pipeline.

        Returns:
            The sanitized model output, or the input text unchanged for a
            translation whose source and target language are the same.

        Raises:
            ValidationError: Request is missing a required field (NilRequestError if None)
            NotFoundError: Unknown action id or category
            SettingsError: Settings could not be loaded
            MisconfiguredProviderError: Provider lacks URL, endpoint, model or token
            UpstreamError: Model listing or completion failed
            EmptyResponseError: Completion returned no choices
        """
        start = time.monotonic()

        if request is None:
            raise self._fail(STEP_REQUEST, NilRequestError())
        if is_blank(request.id):
            raise self._fail(STEP_REQUEST, ValidationError("invalid action id"))

        self._logger.info(f"[ProcessAction] action={request.id} ({len(request.input_text or '')} chars)")

        # Prompts
        try:
            prompt = self._registry.get_user_prompt(request.id)
        except NotFoundError as e:
            raise self._fail(STEP_PROMPT, NotFoundError(f"unknown action '{request.id}'")) from e
        try:
            system_prompt = self._registry.get_system_prompt(prompt.category)
        except NotFoundError as e:
            raise self._fail(STEP_SYSTEM_PROMPT, NotFoundError(
                f"unknown action category '{prompt.category.value}'")) from e
        self._logger.debug(f"[ProcessAction] prompt={prompt.id} category={prompt.category.value}")

        is_translation = prompt.category.is_translation
        try:
            validate_action_request(request, is_translation)
        except ValidationError as e:
            raise self._fail(STEP_REQUEST, e)

        # Settings and provider
        try:
            settings = self._settings.get_current_settings()
        except ActionError as e:
            raise self._fail(STEP_SETTINGS, SettingsError(f"settings unavailable: {e}")) from e

        provider = settings.current_provider
        model_name = settings.model_config.model_name
        try:
            headers = self._check_provider(settings)
        except MisconfiguredProviderError as e:
            raise self._fail(STEP_PROVIDER, e)

        # Prompt
        try:
            user_prompt = build_user_prompt(prompt, request, settings.use_markdown_for_output)
        except ValidationError as e:
            raise self._fail(STEP_BUILD, e)
        self._logger.debug(f"[ProcessAction] user prompt built ({len(user_prompt)} chars)")

        if is_translation and request.input_language == request.output_language:
            self._logger.info(
                f"[ProcessAction] {request.input_language} -> {request.output_language}: same language, skipping model"
            )
            return request.input_text

        # Model availability: only a transport failure is fatal
        try:
            models = self._gateway.list_models(provider.base_url, provider.models_endpoint, headers)
        except UpstreamError as e:
            error = UpstreamError(f"failed to load models from '{provider.provider_name}': {e.message}")
            error.status_code, error.body = e.status_code, e.body
            raise self._fail(STEP_MODELS, error) from e
        if not models:
            self._logger.warn(f"[ProcessAction] provider '{provider.provider_name}' listed no models, trying anyway")
        elif model_name not in models:
            self._logger.warn(
                f"[ProcessAction] model '{model_name}' not listed by '{provider.provider_name}' "
                f"({len(models)} available), trying anyway"
            )

        # Completion
        chat_request = build_chat_completion_request(settings, system_prompt.text, user_prompt)
        llm_start = time.monotonic()
        try:
            response = self._gateway.complete(provider.base_url, provider.completion_endpoint, headers, chat_request)
        except UpstreamError as e:
            raise self._fail(STEP_COMPLETE, e)
        llm_ms = int((time.monotonic() - llm_start) * 1000)

        if not response.choices:
            raise self._fail(STEP_COMPLETE, EmptyResponseError())

        raw = response.choices[0].message.content
        result = self._sanitize(raw)
        self._logger.debug(
            f"[ProcessAction] model={model_name} llm={llm_ms}ms raw={len(raw)} chars clean={len(result)} chars"
        )

        total_ms = int((time.monotonic() - start) * 1000)
        self._logger.ok(f"[ProcessAction] {request.id} done in {total_ms}ms ({len(result)} chars)")
        return result

    # ─────────────────────────────────────────────────────────────────
    # Private methods
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def _check_provider(settings: Settings) -> dict:
        """Refuse to guess missing connection details. Returns request headers."""
        provider = settings.current_provider
        name = provider.provider_name or "<unnamed>"
        if is_blank(provider.base_url):
            raise MisconfiguredProviderError(f"provider '{name}' has no base URL")
        if is_blank(provider.completion_endpoint):
            raise MisconfiguredProviderError(f"provider '{name}' has no completion endpoint")
        if is_blank(settings.model_config.model_name):
            raise MisconfiguredProviderError(f"no model selected for provider '{name}'")
        return provider.request_headers()

    def _fail(self, step: str, error: ActionError) -> ActionError:
        error.step = step
        self._logger.debug(f"[ProcessAction] failed at {step}: {error.message}")
        return error
