"""
User settings for Text Actions: providers, model, languages, output format.

Usage:
    from text_actions.settings import SettingsService, SettingsStore

    service = SettingsService(SettingsStore("~/.text-actions/settings.json"), gateway)
    settings = service.get_current_settings()
"""

from .defaults import DEFAULT_PROVIDERS, LANGUAGES, default_settings
from .models import AuthType, LanguageConfig, ModelConfig, ProviderConfig, ProviderType, Settings
from .service import SettingsService
from .store import SettingsStore
from .validation import validate_provider, validate_settings

__all__ = [
    "AuthType",
    "DEFAULT_PROVIDERS",
    "LANGUAGES",
    "LanguageConfig",
    "ModelConfig",
    "ProviderConfig",
    "ProviderType",
    "Settings",
    "SettingsService",
    "SettingsStore",
    "default_settings",
    "validate_provider",
    "validate_settings",
]
