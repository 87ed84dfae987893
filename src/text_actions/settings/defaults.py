# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Out-of-the-box providers, languages and model settings.

To ship another provider preset, add it to DEFAULT_PROVIDERS.
"""

import copy
from typing import List

from .models import AuthType, LanguageConfig, ModelConfig, ProviderConfig, ProviderType, Settings

LANGUAGES: List[str] = [
    "Chinese",
    "Croatian",
    "Czech",
    "English",
    "French",
    "German",
    "Hindi",
    "Italian",
    "Korean",
    "Polish",
    "Portuguese",
    "Russian",
    "Serbian",
    "Spanish",
    "Ukrainian",
]

DEFAULT_INPUT_LANGUAGE = "English"
DEFAULT_OUTPUT_LANGUAGE = "Ukrainian"

DEFAULT_TEMPERATURE = 0.5

# ============================================================================
# PROVIDER PRESETS
# ============================================================================

OLLAMA = ProviderConfig(
    provider_name="Ollama",
    provider_type=ProviderType.OLLAMA.value,
    base_url="http://127.0.0.1:11434/",
)

LM_STUDIO = ProviderConfig(
    provider_name="LM Studio",
    base_url="http://127.0.0.1:1234/",
)

LLAMA_CPP = ProviderConfig(
    provider_name="Llama.cpp",
    base_url="http://127.0.0.1:8080/",
)

OPENROUTER = ProviderConfig(
    provider_name="OpenRouter.ai",
    base_url="https://openrouter.ai/api/",
    auth_type=AuthType.BEARER.value,
    auth_token_env="OPENROUTER_API_KEY",
)

OPENAI = ProviderConfig(
    provider_name="OpenAI",
    base_url="https://api.openai.com/",
    auth_type=AuthType.BEARER.value,
    auth_token_env="OPENAI_API_KEY",
)

DEFAULT_PROVIDERS: List[ProviderConfig] = [OLLAMA, LM_STUDIO, LLAMA_CPP, OPENROUTER, OPENAI]


def default_settings() -> Settings:
    """A fresh, independent copy of the default settings."""
    return Settings(
        available_providers=copy.deepcopy(DEFAULT_PROVIDERS),
        current_provider=copy.deepcopy(OLLAMA),
        model_config=ModelConfig(
            model_name="",
            is_temperature_enabled=True,
            temperature=DEFAULT_TEMPERATURE,
        ),
        language_config=LanguageConfig(
            languages=list(LANGUAGES),
            default_input_language=DEFAULT_INPUT_LANGUAGE,
            default_output_language=DEFAULT_OUTPUT_LANGUAGE,
        ),
        use_markdown_for_output=False,
    )
