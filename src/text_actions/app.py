# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Wiring for Text Actions.

TextActions builds every collaborator from the app config and exposes the
two services a client needs: actions and settings.
"""

from typing import Optional

from .completion import CompletionOrchestrator
from .config import Config, get_config, resolve_settings_path
from .llm import HttpLLMGateway, LLMGateway
from .prompts import PromptRegistry, build_registry
from .service import ActionService
from .settings import SettingsService, SettingsStore
from .utils import ConsoleLogger, Logger


class TextActions:
    """Application facade: one registry, one gateway, one settings store."""

    def __init__(
        self,
        registry: PromptRegistry,
        store: SettingsStore,
        gateway: LLMGateway,
        logger: Logger,
    ):
        self.registry = registry
        self.gateway = gateway
        self.logger = logger
        self.settings = SettingsService(store, gateway, logger)
        self.orchestrator = CompletionOrchestrator(registry, self.settings, gateway, logger)
        self.actions = ActionService(registry, self.orchestrator, self.settings, logger)

    @classmethod
    def from_config(cls, config: Optional[Config] = None, logger: Optional[Logger] = None) -> "TextActions":
        """Build the app from ~/.text-actions/config.toml (or the given config)."""
        config = config or get_config()
        return cls(
            registry=build_registry(),
            store=SettingsStore(resolve_settings_path(config)),
            gateway=HttpLLMGateway(timeout=config.http.timeout, check_timeout=config.http.check_timeout),
            logger=logger or ConsoleLogger(debug=config.log.debug),
        )

    def close(self) -> None:
        self.gateway.close()

    def __enter__(self) -> "TextActions":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
