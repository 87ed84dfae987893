# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Settings data model.

Dataclasses use snake_case; the JSON file uses the camelCase keys below so
existing settings files keep loading.
"""

import copy
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from ..errors import MisconfiguredProviderError
from ..utils import is_blank


def _json_bool(data: dict, key: str, default: bool) -> bool:
    """Read a JSON boolean. Strings like "false" are rejected, not coerced."""
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise TypeError(f"{key} must be true or false, got {value!r}")
    return value


def _json_object(value, key: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"{key} must be a JSON object, got {type(value).__name__}")
    return value


class ProviderType(str, Enum):
    OPEN_AI_COMPATIBLE = "open-ai-compatible"
    OLLAMA = "ollama"


class AuthType(str, Enum):
    NONE = "none"
    BEARER = "bearer"
    API_KEY = "api-key"


@dataclass
class ProviderConfig:
    """Connection details for one LLM server."""
    provider_name: str
    provider_type: str = ProviderType.OPEN_AI_COMPATIBLE.value
    base_url: str = ""
    models_endpoint: str = "/v1/models"
    completion_endpoint: str = "/v1/chat/completions"
    headers: Dict[str, str] = field(default_factory=dict)
    auth_type: str = AuthType.NONE.value
    auth_token: str = ""
    auth_token_env: str = ""   # Env var holding the token; wins over auth_token

    @property
    def is_ollama(self) -> bool:
        return self.provider_type == ProviderType.OLLAMA.value

    def resolve_token(self) -> str:
        if not is_blank(self.auth_token_env):
            return os.environ.get(self.auth_token_env.strip(), "").strip()
        return self.auth_token.strip()

    def request_headers(self) -> Dict[str, str]:
        """Custom headers plus the auth header, ready to send.

        Raises:
            MisconfiguredProviderError: If auth is required but no token resolves
        """
        headers = {k: v for k, v in self.headers.items() if not is_blank(k)}
        if self.auth_type == AuthType.NONE.value:
            return headers

        token = self.resolve_token()
        if not token:
            source = f"env var {self.auth_token_env}" if not is_blank(self.auth_token_env) else "auth token"
            raise MisconfiguredProviderError(
                f"provider '{self.provider_name}' needs {self.auth_type} auth but {source} is empty"
            )
        if self.auth_type == AuthType.BEARER.value:
            headers["Authorization"] = f"Bearer {token}"
        elif self.auth_type == AuthType.API_KEY.value:
            headers["Api-Key"] = token
        return headers

    def to_dict(self) -> dict:
        return {
            "providerName": self.provider_name,
            "providerType": self.provider_type,
            "baseUrl": self.base_url,
            "modelsEndpoint": self.models_endpoint,
            "completionEndpoint": self.completion_endpoint,
            "headers": dict(self.headers),
            "authType": self.auth_type,
            "authToken": self.auth_token,
            "authTokenEnv": self.auth_token_env,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProviderConfig":
        return cls(
            provider_name=data.get("providerName", ""),
            provider_type=data.get("providerType", ProviderType.OPEN_AI_COMPATIBLE.value),
            base_url=data.get("baseUrl", ""),
            models_endpoint=data.get("modelsEndpoint", ""),
            completion_endpoint=data.get("completionEndpoint", ""),
            headers=dict(_json_object(data.get("headers"), "headers")),
            auth_type=data.get("authType", AuthType.NONE.value),
            auth_token=data.get("authToken", ""),
            auth_token_env=data.get("authTokenEnv", ""),
        )


@dataclass
class ModelConfig:
    """Which model to call and with what temperature."""
    model_name: str = ""
    is_temperature_enabled: bool = True
    temperature: float = 0.5

    def to_dict(self) -> dict:
        return {
            "modelName": self.model_name,
            "isTemperatureEnabled": self.is_temperature_enabled,
            "temperature": self.temperature,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ModelConfig":
        default = cls()
        temperature = data.get("temperature", default.temperature)
        if isinstance(temperature, bool) or not isinstance(temperature, (int, float)):
            raise TypeError(f"temperature must be a number, got {temperature!r}")
        return cls(
            model_name=data.get("modelName", default.model_name),
            is_temperature_enabled=_json_bool(data, "isTemperatureEnabled", default.is_temperature_enabled),
            temperature=temperature,
        )


@dataclass
class LanguageConfig:
    """Languages offered for translation and the default pair."""
    languages: List[str] = field(default_factory=list)
    default_input_language: str = ""
    default_output_language: str = ""

    def to_dict(self) -> dict:
        return {
            "languages": list(self.languages),
            "defaultInputLanguage": self.default_input_language,
            "defaultOutputLanguage": self.default_output_language,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LanguageConfig":
        return cls(
            languages=list(data.get("languages") or []),
            default_input_language=data.get("defaultInputLanguage", ""),
            default_output_language=data.get("defaultOutputLanguage", ""),
        )


@dataclass
class Settings:
    """Everything the user can change from the settings screen."""
    available_providers: List[ProviderConfig] = field(default_factory=list)
    current_provider: ProviderConfig = field(default_factory=lambda: ProviderConfig(provider_name=""))
    model_config: ModelConfig = field(default_factory=ModelConfig)
    language_config: LanguageConfig = field(default_factory=LanguageConfig)
    use_markdown_for_output: bool = False

    def find_provider(self, name: str):
        """Return the available provider with this name, or None."""
        for provider in self.available_providers:
            if provider.provider_name == name:
                return provider
        return None

    def to_dict(self) -> dict:
        return {
            "availableProviderConfigs": [p.to_dict() for p in self.available_providers],
            "currentProviderConfig": self.current_provider.to_dict(),
            "modelConfig": self.model_config.to_dict(),
            "languageConfig": self.language_config.to_dict(),
            "useMarkdownForOutput": self.use_markdown_for_output,
        }

    @classmethod
    def from_dict(cls, data: dict, defaults: "Settings") -> "Settings":
        """Parse the JSON form. Sections missing from data come from defaults."""
        settings = copy.deepcopy(defaults)
        if "availableProviderConfigs" in data:
            settings.available_providers = [
                ProviderConfig.from_dict(_json_object(p, "availableProviderConfigs[]"))
                for p in data["availableProviderConfigs"] or []
            ]
        if "currentProviderConfig" in data:
            settings.current_provider = ProviderConfig.from_dict(
                _json_object(data["currentProviderConfig"], "currentProviderConfig"))
        if "modelConfig" in data:
            settings.model_config = ModelConfig.from_dict(_json_object(data["modelConfig"], "modelConfig"))
        if "languageConfig" in data:
            settings.language_config = LanguageConfig.from_dict(_json_object(data["languageConfig"], "languageConfig"))
        if "useMarkdownForOutput" in data:
            settings.use_markdown_for_output = _json_bool(data, "useMarkdownForOutput", False)
        return settings
