# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Settings service: read the current settings and change them safely.

Every mutation runs inside SettingsStore.update(), so the whole
read-change-validate-write cycle holds the store's exclusive lock and a
failed validation leaves the file untouched.
"""

import copy
from typing import Callable, List, Optional

from ..errors import NotFoundError, SettingsError, UpstreamError, ValidationError
from ..llm import ROLE_USER, ChatCompletionRequest, LLMGateway, Message
from ..utils import Logger, NullLogger
from .defaults import default_settings
from .models import AuthType, LanguageConfig, ModelConfig, ProviderConfig, ProviderType, Settings
from .store import SettingsStore
from .validation import validate_provider, validate_settings

# Sent by verify_provider to check the completion endpoint
VERIFY_PROMPT = "Give me one random word"


class SettingsService:
    """Provider/settings resolver backed by a SettingsStore."""

    def __init__(self, store: SettingsStore, gateway: LLMGateway, logger: Optional[Logger] = None):
        self._store = store
        self._gateway = gateway
        self._logger = logger or NullLogger()

    # ─────────────────────────────────────────────────────────────────
    # Reading
    # ─────────────────────────────────────────────────────────────────

    def get_current_settings(self) -> Settings:
        """
        Load the saved settings, writing defaults on first use.

        Raises:
            SettingsError: If the file exists but cannot be read or parsed
        """
        if not self._store.exists():
            self._logger.info(f"No settings file, writing defaults to {self._store.path}")
            return self._store.update(lambda current: current)
        return self._store.load()

    def get_default_settings(self) -> Settings:
        return default_settings()

    def get_settings_file_path(self) -> str:
        return str(self._store.path)

    def get_provider_types(self) -> List[str]:
        return [t.value for t in ProviderType]

    def get_auth_types(self) -> List[str]:
        return [t.value for t in AuthType]

    def get_models(self, provider: Optional[ProviderConfig] = None) -> List[str]:
        """
        List the models a provider serves (the current provider by default).

        Raises:
            ValidationError: If the given provider is malformed
            MisconfiguredProviderError: If its auth token cannot be resolved
            UpstreamError: If the server cannot be reached or answers badly
        """
        if provider is None:
            provider = self.get_current_settings().current_provider
        validate_provider(provider)
        models = self._gateway.list_models(provider.base_url, provider.models_endpoint,
                                           provider.request_headers())
        self._logger.debug(f"[GetModels] {provider.provider_name}: {len(models)} models")
        return models

    # ─────────────────────────────────────────────────────────────────
    # Whole-object writes
    # ─────────────────────────────────────────────────────────────────

    def save_settings(self, settings: Settings) -> Settings:
        """Validate then persist a complete settings object."""
        validate_settings(settings)
        self._store.save(settings)
        self._logger.ok(f"Settings saved to {self._store.path}")
        return settings

    def reset_to_default(self) -> Settings:
        self._logger.info("Resetting settings to defaults")
        return self.save_settings(default_settings())

    # ─────────────────────────────────────────────────────────────────
    # Provider CRUD
    # ─────────────────────────────────────────────────────────────────

    def verify_provider(self, provider: ProviderConfig, model_name: str = "") -> str:
        """
        Check that a provider answers on both endpoints.

        Lists models, then sends a one-message completion with model_name,
        or the first listed model when model_name is empty.

        Returns:
            The model the completion check used

        Raises:
            ValidationError: If the provider is malformed
            UpstreamError: If either endpoint fails or no models are listed
        """
        models = self.get_models(provider)
        if not models:
            self._logger.error(f"[VerifyProvider] {provider.provider_name}: no models listed")
            raise UpstreamError("no models found in models endpoint response")

        test_model = model_name or models[0]
        self._logger.debug(f"[VerifyProvider] {provider.provider_name}: completion check with '{test_model}'")
        request = ChatCompletionRequest(
            model=test_model,
            messages=[Message(role=ROLE_USER, content=VERIFY_PROMPT)],
        )
        try:
            self._gateway.complete(provider.base_url, provider.completion_endpoint,
                                   provider.request_headers(), request)
        except UpstreamError as e:
            self._logger.error(f"[VerifyProvider] {provider.provider_name}: completion endpoint failed: {e}")
            raise
        return test_model

    def create_provider(self, provider: ProviderConfig, verify: bool = True, model_name: str = "") -> ProviderConfig:
        """
        Add a provider to the available list.

        With verify, both endpoints are checked first (see verify_provider)
        so a typo in the URL or an endpoint fails here rather than on the
        first action.

        Raises:
            ValidationError: If malformed or a provider with that name exists
            UpstreamError: If verification fails
        """
        validate_provider(provider)
        if verify:
            self.verify_provider(provider, model_name)

        def mutate(settings: Settings) -> Settings:
            if settings.find_provider(provider.provider_name) is not None:
                raise ValidationError(f"provider '{provider.provider_name}' already exists")
            settings.available_providers.append(copy.deepcopy(provider))
            return self._validated(settings)

        self._update(mutate)
        self._logger.ok(f"Provider created: {provider.provider_name}")
        return provider

    def update_provider(self, provider: ProviderConfig) -> ProviderConfig:
        """
        Replace the provider with the same name. The current provider follows
        if it is the one being updated.

        Raises:
            ValidationError: If malformed
            NotFoundError: If no provider has that name
        """
        validate_provider(provider)

        def mutate(settings: Settings) -> Settings:
            for i, existing in enumerate(settings.available_providers):
                if existing.provider_name == provider.provider_name:
                    settings.available_providers[i] = copy.deepcopy(provider)
                    break
            else:
                raise NotFoundError(f"provider '{provider.provider_name}' not found")
            if settings.current_provider.provider_name == provider.provider_name:
                settings.current_provider = copy.deepcopy(provider)
            return self._validated(settings)

        self._update(mutate)
        self._logger.ok(f"Provider updated: {provider.provider_name}")
        return provider

    def delete_provider(self, name: str) -> None:
        """
        Remove a provider. The current provider cannot be removed.

        Raises:
            NotFoundError: If no provider has that name
            ValidationError: If it is the current provider
        """
        def mutate(settings: Settings) -> Settings:
            if settings.find_provider(name) is None:
                raise NotFoundError(f"provider '{name}' not found")
            if settings.current_provider.provider_name == name:
                raise ValidationError(f"cannot delete the current provider '{name}'; select another one first")
            settings.available_providers = [
                p for p in settings.available_providers if p.provider_name != name
            ]
            return self._validated(settings)

        self._update(mutate)
        self._logger.ok(f"Provider deleted: {name}")

    def select_provider(self, name: str) -> ProviderConfig:
        """
        Make an available provider the current one. No connectivity check.

        Raises:
            NotFoundError: If no provider has that name
            ValidationError: If that provider is malformed
        """
        selected: List[ProviderConfig] = []

        def mutate(settings: Settings) -> Settings:
            provider = settings.find_provider(name)
            if provider is None:
                raise NotFoundError(f"provider '{name}' not found")
            validate_provider(provider)
            settings.current_provider = copy.deepcopy(provider)
            selected.append(provider)
            return self._validated(settings)

        self._update(mutate)
        self._logger.ok(f"Provider selected: {name}")
        return selected[0]

    # ─────────────────────────────────────────────────────────────────
    # Model, language and output settings
    # ─────────────────────────────────────────────────────────────────

    def update_model_config(self, model_config: ModelConfig) -> Settings:
        def mutate(settings: Settings) -> Settings:
            settings.model_config = copy.deepcopy(model_config)
            return self._validated(settings)
        return self._update(mutate)

    def update_language_config(self, language_config: LanguageConfig) -> Settings:
        def mutate(settings: Settings) -> Settings:
            settings.language_config = copy.deepcopy(language_config)
            return self._validated(settings)
        return self._update(mutate)

    def set_use_markdown(self, enabled: bool) -> Settings:
        def mutate(settings: Settings) -> Settings:
            settings.use_markdown_for_output = bool(enabled)
            return self._validated(settings)
        return self._update(mutate)

    # ─────────────────────────────────────────────────────────────────
    # Private methods
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def _validated(settings: Settings) -> Settings:
        validate_settings(settings)
        return settings

    def _update(self, mutate: Callable[[Settings], Settings]) -> Settings:
        try:
            return self._store.update(mutate)
        except SettingsError as e:
            self._logger.error(f"Settings update failed: {e}")
            raise
