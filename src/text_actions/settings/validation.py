# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Shape checks for providers and whole settings objects.

A settings object is accepted or rejected as a unit; nothing is saved
half-valid.
"""

from ..errors import ValidationError
from ..utils import is_blank
from .models import AuthType, ProviderConfig, ProviderType, Settings

MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0

_PROVIDER_TYPES = {t.value for t in ProviderType}
_AUTH_TYPES = {t.value for t in AuthType}


def _is_http_url(url: str) -> bool:
    """Check if a string starts with an HTTP/HTTPS scheme."""
    return url.startswith("http://") or url.startswith("https://")


def validate_provider(provider: ProviderConfig) -> None:
    """
    Validate one provider configuration.

    Raises:
        ValidationError: On the first field that is blank or malformed
    """
    if provider is None:
        raise ValidationError("provider config is missing")

    name = provider.provider_name
    if is_blank(name):
        raise ValidationError("provider name is blank")
    if is_blank(provider.provider_type):
        raise ValidationError(f"provider '{name}': provider type is blank")
    if provider.provider_type not in _PROVIDER_TYPES:
        raise ValidationError(
            f"provider '{name}': unknown provider type '{provider.provider_type}'. "
            f"Available: {', '.join(sorted(_PROVIDER_TYPES))}"
        )
    if is_blank(provider.base_url):
        raise ValidationError(f"provider '{name}': base URL is blank")
    if not _is_http_url(provider.base_url.strip()):
        raise ValidationError(f"provider '{name}': base URL must start with http:// or https://")
    if is_blank(provider.models_endpoint):
        raise ValidationError(f"provider '{name}': models endpoint is blank")
    if is_blank(provider.completion_endpoint):
        raise ValidationError(f"provider '{name}': completion endpoint is blank")
    if not provider.models_endpoint.startswith("/"):
        raise ValidationError(f"provider '{name}': models endpoint must start with '/'")
    if not provider.completion_endpoint.startswith("/"):
        raise ValidationError(f"provider '{name}': completion endpoint must start with '/'")

    if provider.auth_type not in _AUTH_TYPES:
        raise ValidationError(f"provider '{name}': unknown auth type '{provider.auth_type}'")
    if provider.auth_type != AuthType.NONE.value \
            and is_blank(provider.auth_token) and is_blank(provider.auth_token_env):
        raise ValidationError(f"provider '{name}': {provider.auth_type} auth needs a token or a token env var")


def validate_settings(settings: Settings) -> None:
    """
    Validate a complete settings object.

    Raises:
        ValidationError: If any provider, the temperature, or the language
            setup is invalid
    """
    if settings is None:
        raise ValidationError("settings are missing")

    validate_provider(settings.current_provider)
    for provider in settings.available_providers:
        validate_provider(provider)

    model = settings.model_config
    if model.is_temperature_enabled:
        temperature = model.temperature
        if isinstance(temperature, bool) or not isinstance(temperature, (int, float)):
            raise ValidationError("temperature must be a number")
        if not MIN_TEMPERATURE <= temperature <= MAX_TEMPERATURE:
            raise ValidationError(
                f"temperature must be between {MIN_TEMPERATURE} and {MAX_TEMPERATURE}, got {temperature}"
            )

    languages = settings.language_config
    if not languages.languages:
        raise ValidationError("language list is empty")
    if languages.default_input_language not in languages.languages:
        raise ValidationError(
            f"default input language '{languages.default_input_language}' is not in the language list"
        )
    if languages.default_output_language not in languages.languages:
        raise ValidationError(
            f"default output language '{languages.default_output_language}' is not in the language list"
        )
