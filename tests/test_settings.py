# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Unit tests for settings: validation, the JSON store and SettingsService.

All tests use temporary directories and never touch ~/.text-actions/.
"""

import json
import stat
import threading

import pytest

from text_actions.errors import (
    MisconfiguredProviderError,
    NotFoundError,
    SettingsError,
    UpstreamError,
    ValidationError,
)
from text_actions.llm import ChatCompletionResponse, Choice, LLMGateway, Message
from text_actions.settings import (
    DEFAULT_PROVIDERS,
    LANGUAGES,
    AuthType,
    LanguageConfig,
    ModelConfig,
    ProviderConfig,
    ProviderType,
    Settings,
    SettingsService,
    SettingsStore,
    default_settings,
    validate_provider,
    validate_settings,
)


class FakeGateway(LLMGateway):
    """Records list_models and complete calls."""

    def __init__(self, models=None, error=None, complete_error=None):
        self.models = models if models is not None else ["llama3"]
        self.error = error
        self.complete_error = complete_error
        self.calls = []
        self.completions = []

    def list_models(self, base_url, endpoint, headers):
        self.calls.append((base_url, endpoint, dict(headers)))
        if self.error is not None:
            raise self.error
        return list(self.models)

    def complete(self, base_url, endpoint, headers, request):
        self.completions.append((base_url, endpoint, request))
        if self.complete_error is not None:
            raise self.complete_error
        return ChatCompletionResponse(choices=[Choice(index=0, message=Message(role="assistant", content="word"))])


def _provider(name="Local", **overrides) -> ProviderConfig:
    fields = dict(provider_name=name, base_url="http://127.0.0.1:1234/")
    fields.update(overrides)
    return ProviderConfig(**fields)


def _service(tmp_path, gateway=None):
    store = SettingsStore(tmp_path / "settings.json")
    return SettingsService(store, gateway or FakeGateway()), store


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

class TestDefaults:
    def test_defaults_are_valid(self):
        validate_settings(default_settings())

    def test_current_provider_is_ollama(self):
        settings = default_settings()
        assert settings.current_provider.provider_name == "Ollama"
        assert settings.current_provider.is_ollama

    def test_default_languages(self):
        languages = default_settings().language_config
        assert languages.languages == LANGUAGES
        assert languages.default_input_language == "English"
        assert languages.default_output_language == "Ukrainian"

    def test_each_call_is_independent(self):
        a = default_settings()
        a.available_providers.clear()
        a.language_config.languages.append("Klingon")
        b = default_settings()
        assert len(b.available_providers) == len(DEFAULT_PROVIDERS)
        assert "Klingon" not in b.language_config.languages


# ---------------------------------------------------------------------------
# Provider auth headers
# ---------------------------------------------------------------------------

class TestRequestHeaders:
    def test_no_auth(self):
        assert _provider(headers={"X-Org": "1"}).request_headers() == {"X-Org": "1"}

    def test_bearer(self):
        headers = _provider(auth_type=AuthType.BEARER.value, auth_token="abc").request_headers()
        assert headers["Authorization"] == "Bearer abc"

    def test_api_key(self):
        headers = _provider(auth_type=AuthType.API_KEY.value, auth_token="abc").request_headers()
        assert headers["Api-Key"] == "abc"

    def test_env_var_wins(self, monkeypatch):
        monkeypatch.setenv("TA_TEST_TOKEN", "from-env")
        provider = _provider(auth_type=AuthType.BEARER.value, auth_token="stored", auth_token_env="TA_TEST_TOKEN")
        assert provider.request_headers()["Authorization"] == "Bearer from-env"

    def test_missing_token_raises(self, monkeypatch):
        monkeypatch.delenv("TA_TEST_TOKEN", raising=False)
        provider = _provider(auth_type=AuthType.BEARER.value, auth_token_env="TA_TEST_TOKEN")
        with pytest.raises(MisconfiguredProviderError):
            provider.request_headers()


# ---------------------------------------------------------------------------
# validate_provider / validate_settings
# ---------------------------------------------------------------------------

class TestValidateProvider:
    def test_valid(self):
        validate_provider(_provider())

    @pytest.mark.parametrize("overrides,message", [
        ({"provider_name": " "}, "name is blank"),
        ({"provider_type": "grpc"}, "unknown provider type"),
        ({"base_url": ""}, "base URL is blank"),
        ({"base_url": "127.0.0.1:1234"}, "must start with http"),
        ({"models_endpoint": ""}, "models endpoint is blank"),
        ({"completion_endpoint": "v1/chat"}, "must start with '/'"),
        ({"auth_type": "oauth"}, "unknown auth type"),
        ({"auth_type": "bearer"}, "needs a token"),
    ])
    def test_invalid(self, overrides, message):
        with pytest.raises(ValidationError, match=message):
            validate_provider(_provider(**overrides))

    def test_none(self):
        with pytest.raises(ValidationError):
            validate_provider(None)


class TestValidateSettings:
    def test_temperature_out_of_range(self):
        settings = default_settings()
        settings.model_config.temperature = 2.5
        with pytest.raises(ValidationError, match="temperature"):
            validate_settings(settings)

    def test_temperature_ignored_when_disabled(self):
        settings = default_settings()
        settings.model_config = ModelConfig(is_temperature_enabled=False, temperature=99)
        validate_settings(settings)

    def test_temperature_must_be_number(self):
        settings = default_settings()
        settings.model_config.temperature = "hot"
        with pytest.raises(ValidationError, match="number"):
            validate_settings(settings)

    def test_empty_language_list(self):
        settings = default_settings()
        settings.language_config = LanguageConfig(languages=[])
        with pytest.raises(ValidationError, match="empty"):
            validate_settings(settings)

    def test_default_language_not_listed(self):
        settings = default_settings()
        settings.language_config.default_output_language = "Klingon"
        with pytest.raises(ValidationError, match="Klingon"):
            validate_settings(settings)

    def test_invalid_available_provider(self):
        settings = default_settings()
        settings.available_providers.append(_provider(base_url="ftp://x"))
        with pytest.raises(ValidationError):
            validate_settings(settings)


# ---------------------------------------------------------------------------
# JSON form
# ---------------------------------------------------------------------------

class TestSettingsJson:
    def test_camel_case_keys(self):
        data = default_settings().to_dict()
        assert set(data) == {
            "availableProviderConfigs", "currentProviderConfig",
            "modelConfig", "languageConfig", "useMarkdownForOutput",
        }
        assert data["currentProviderConfig"]["providerType"] == ProviderType.OLLAMA.value
        assert "isTemperatureEnabled" in data["modelConfig"]

    def test_missing_sections_come_from_defaults(self):
        settings = Settings.from_dict({"useMarkdownForOutput": True}, default_settings())
        assert settings.use_markdown_for_output is True
        assert settings.current_provider.provider_name == "Ollama"
        assert settings.language_config.languages == LANGUAGES

    def test_string_boolean_rejected(self):
        with pytest.raises(TypeError, match="useMarkdownForOutput"):
            Settings.from_dict({"useMarkdownForOutput": "false"}, default_settings())

    def test_temperature_flag_must_be_boolean(self):
        with pytest.raises(TypeError, match="isTemperatureEnabled"):
            Settings.from_dict({"modelConfig": {"isTemperatureEnabled": "no"}}, default_settings())

    def test_temperature_must_be_number(self):
        with pytest.raises(TypeError, match="temperature"):
            Settings.from_dict({"modelConfig": {"temperature": "0.5"}}, default_settings())

    def test_headers_must_be_object(self):
        with pytest.raises(TypeError, match="headers"):
            Settings.from_dict({"currentProviderConfig": {"headers": ["x"]}}, default_settings())


# ---------------------------------------------------------------------------
# SettingsStore
# ---------------------------------------------------------------------------

class TestSettingsStore:
    def test_load_missing_raises(self, tmp_path):
        with pytest.raises(SettingsError, match="not found"):
            SettingsStore(tmp_path / "settings.json").load()

    def test_save_then_load(self, tmp_path):
        store = SettingsStore(tmp_path / "settings.json")
        settings = default_settings()
        settings.model_config.model_name = "llama3"
        store.save(settings)
        assert store.load() == settings

    def test_file_is_private(self, tmp_path):
        store = SettingsStore(tmp_path / "conf" / "settings.json")
        store.save(default_settings())
        assert stat.S_IMODE(store.path.stat().st_mode) == 0o600
        assert stat.S_IMODE(store.path.parent.stat().st_mode) == 0o700

    def test_existing_directory_keeps_its_mode(self, tmp_path):
        shared = tmp_path / "shared"
        shared.mkdir()
        shared.chmod(0o755)
        store = SettingsStore(shared / "settings.json")
        store.save(default_settings())
        store.load()
        assert stat.S_IMODE(shared.stat().st_mode) == 0o755
        assert stat.S_IMODE(store.path.stat().st_mode) == 0o600

    def test_file_is_camel_case_json(self, tmp_path):
        store = SettingsStore(tmp_path / "settings.json")
        store.save(default_settings())
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert data["currentProviderConfig"]["providerName"] == "Ollama"

    def test_corrupt_json_raises(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SettingsError, match="not valid JSON"):
            SettingsStore(path).load()

    def test_non_object_json_raises(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(SettingsError, match="JSON object"):
            SettingsStore(path).load()

    @pytest.mark.parametrize("content", [
        {"currentProviderConfig": {"headers": ["x"]}},
        {"useMarkdownForOutput": "false"},
        {"modelConfig": {"isTemperatureEnabled": 1}},
        {"modelConfig": "llama3"},
    ])
    def test_bad_field_types_raise_settings_error(self, tmp_path, content):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps(content), encoding="utf-8")
        with pytest.raises(SettingsError, match="unexpected shape"):
            SettingsStore(path).load()

    def test_update_starts_from_defaults(self, tmp_path):
        store = SettingsStore(tmp_path / "settings.json")

        def mutate(settings):
            settings.use_markdown_for_output = True
            return settings

        store.update(mutate)
        loaded = store.load()
        assert loaded.use_markdown_for_output is True
        assert loaded.current_provider.provider_name == "Ollama"

    def test_failed_update_leaves_file_untouched(self, tmp_path):
        store = SettingsStore(tmp_path / "settings.json")
        store.save(default_settings())
        before = store.path.read_text(encoding="utf-8")

        def mutate(settings):
            settings.use_markdown_for_output = True
            raise ValidationError("nope")

        with pytest.raises(ValidationError):
            store.update(mutate)
        assert store.path.read_text(encoding="utf-8") == before

    def test_no_temp_files_left(self, tmp_path):
        store = SettingsStore(tmp_path / "settings.json")
        store.save(default_settings())
        leftovers = [p.name for p in tmp_path.iterdir() if p.name.endswith(".tmp")]
        assert leftovers == []

    def test_concurrent_updates_are_serialized(self, tmp_path):
        store = SettingsStore(tmp_path / "settings.json")
        store.save(default_settings())

        def add_language(i):
            def mutate(settings):
                settings.language_config.languages.append(f"Lang{i}")
                return settings
            store.update(mutate)

        threads = [threading.Thread(target=add_language, args=(i,)) for i in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        languages = store.load().language_config.languages
        assert all(f"Lang{i}" in languages for i in range(10))


# ---------------------------------------------------------------------------
# SettingsService: reading
# ---------------------------------------------------------------------------

class TestSettingsServiceRead:
    def test_first_read_writes_defaults(self, tmp_path):
        service, store = _service(tmp_path)
        assert not store.exists()
        settings = service.get_current_settings()
        assert store.exists()
        assert settings == default_settings()

    def test_corrupt_file_is_an_error(self, tmp_path):
        service, store = _service(tmp_path)
        store.path.write_text("garbage", encoding="utf-8")
        with pytest.raises(SettingsError):
            service.get_current_settings()

    def test_settings_file_path(self, tmp_path):
        service, _ = _service(tmp_path)
        assert service.get_settings_file_path() == str(tmp_path / "settings.json")

    def test_provider_and_auth_types(self, tmp_path):
        service, _ = _service(tmp_path)
        assert service.get_provider_types() == ["open-ai-compatible", "ollama"]
        assert service.get_auth_types() == ["none", "bearer", "api-key"]

    def test_get_models_uses_current_provider(self, tmp_path):
        gateway = FakeGateway(models=["a", "b"])
        service, _ = _service(tmp_path, gateway)
        assert service.get_models() == ["a", "b"]
        assert gateway.calls[0][:2] == ("http://127.0.0.1:11434/", "/v1/models")

    def test_get_models_propagates_upstream_error(self, tmp_path):
        service, _ = _service(tmp_path, FakeGateway(error=UpstreamError("down")))
        with pytest.raises(UpstreamError):
            service.get_models(_provider())


# ---------------------------------------------------------------------------
# SettingsService: providers
# ---------------------------------------------------------------------------

class TestSettingsServiceProviders:
    def test_create_provider_verifies_and_saves(self, tmp_path):
        gateway = FakeGateway()
        service, _ = _service(tmp_path, gateway)
        service.create_provider(_provider("Local"))
        assert len(gateway.calls) == 1
        assert service.get_current_settings().find_provider("Local") is not None

    def test_create_provider_without_verify(self, tmp_path):
        gateway = FakeGateway()
        service, _ = _service(tmp_path, gateway)
        service.create_provider(_provider("Local"), verify=False)
        assert gateway.calls == []
        assert gateway.completions == []

    def test_create_provider_checks_completion_with_first_model(self, tmp_path):
        gateway = FakeGateway(models=["qwen", "llama3"])
        service, _ = _service(tmp_path, gateway)
        service.create_provider(_provider("Local"))
        assert len(gateway.completions) == 1
        base_url, endpoint, request = gateway.completions[0]
        assert (base_url, endpoint) == ("http://127.0.0.1:1234/", "/v1/chat/completions")
        assert request.model == "qwen"
        assert [m.role for m in request.messages] == ["user"]

    def test_create_provider_checks_completion_with_given_model(self, tmp_path):
        gateway = FakeGateway(models=["qwen", "llama3"])
        service, _ = _service(tmp_path, gateway)
        service.create_provider(_provider("Local"), model_name="llama3")
        assert gateway.completions[0][2].model == "llama3"

    def test_create_provider_with_no_models_saves_nothing(self, tmp_path):
        gateway = FakeGateway(models=[])
        service, store = _service(tmp_path, gateway)
        with pytest.raises(UpstreamError, match="no models found"):
            service.create_provider(_provider("Local"))
        assert gateway.completions == []
        assert not store.exists()

    def test_create_provider_with_broken_completion_endpoint_saves_nothing(self, tmp_path):
        gateway = FakeGateway(complete_error=UpstreamError("HTTP 404", status_code=404))
        service, store = _service(tmp_path, gateway)
        with pytest.raises(UpstreamError, match="404"):
            service.create_provider(_provider("Local", completion_endpoint="/v1/chat/complete"))
        assert not store.exists()

    def test_verify_provider_returns_model_used(self, tmp_path):
        service, _ = _service(tmp_path, FakeGateway(models=["a", "b"]))
        assert service.verify_provider(_provider("Local")) == "a"

    def test_create_provider_models_failure_saves_nothing(self, tmp_path):
        service, store = _service(tmp_path, FakeGateway(error=UpstreamError("down")))
        with pytest.raises(UpstreamError):
            service.create_provider(_provider("Local"))
        assert not store.exists()

    def test_create_duplicate_rejected(self, tmp_path):
        service, _ = _service(tmp_path)
        with pytest.raises(ValidationError, match="already exists"):
            service.create_provider(_provider("Ollama"), verify=False)

    def test_create_malformed_rejected(self, tmp_path):
        service, _ = _service(tmp_path)
        with pytest.raises(ValidationError):
            service.create_provider(_provider("Bad", base_url=""), verify=False)

    def test_update_current_provider_follows(self, tmp_path):
        service, _ = _service(tmp_path)
        updated = _provider("Ollama", provider_type=ProviderType.OLLAMA.value, base_url="http://10.0.0.2:11434/")
        service.update_provider(updated)
        settings = service.get_current_settings()
        assert settings.current_provider.base_url == "http://10.0.0.2:11434/"
        assert settings.find_provider("Ollama").base_url == "http://10.0.0.2:11434/"

    def test_update_unknown_provider(self, tmp_path):
        service, _ = _service(tmp_path)
        with pytest.raises(NotFoundError):
            service.update_provider(_provider("Nope"))

    def test_delete_provider(self, tmp_path):
        service, _ = _service(tmp_path)
        service.delete_provider("LM Studio")
        assert service.get_current_settings().find_provider("LM Studio") is None

    def test_delete_current_provider_rejected(self, tmp_path):
        service, _ = _service(tmp_path)
        with pytest.raises(ValidationError, match="current provider"):
            service.delete_provider("Ollama")

    def test_delete_unknown_provider(self, tmp_path):
        service, _ = _service(tmp_path)
        with pytest.raises(NotFoundError):
            service.delete_provider("Nope")

    def test_select_provider(self, tmp_path):
        gateway = FakeGateway()
        service, _ = _service(tmp_path, gateway)
        service.select_provider("LM Studio")
        assert service.get_current_settings().current_provider.provider_name == "LM Studio"
        assert gateway.calls == []

    def test_select_unknown_provider(self, tmp_path):
        service, _ = _service(tmp_path)
        with pytest.raises(NotFoundError):
            service.select_provider("Nope")


# ---------------------------------------------------------------------------
# SettingsService: model, languages, output
# ---------------------------------------------------------------------------

class TestSettingsServiceUpdates:
    def test_update_model_config(self, tmp_path):
        service, _ = _service(tmp_path)
        service.update_model_config(ModelConfig(model_name="llama3", temperature=0.2))
        model = service.get_current_settings().model_config
        assert model.model_name == "llama3"
        assert model.temperature == 0.2

    def test_invalid_model_config_not_saved(self, tmp_path):
        service, _ = _service(tmp_path)
        service.get_current_settings()
        with pytest.raises(ValidationError):
            service.update_model_config(ModelConfig(model_name="llama3", temperature=-1))
        assert service.get_current_settings().model_config.model_name == ""

    def test_update_language_config(self, tmp_path):
        service, _ = _service(tmp_path)
        service.update_language_config(LanguageConfig(
            languages=["English", "German"],
            default_input_language="German",
            default_output_language="English",
        ))
        assert service.get_current_settings().language_config.languages == ["English", "German"]

    def test_set_use_markdown(self, tmp_path):
        service, _ = _service(tmp_path)
        service.set_use_markdown(True)
        assert service.get_current_settings().use_markdown_for_output is True

    def test_reset_to_default(self, tmp_path):
        service, _ = _service(tmp_path)
        service.set_use_markdown(True)
        service.reset_to_default()
        assert service.get_current_settings() == default_settings()

    def test_save_settings_validates(self, tmp_path):
        service, store = _service(tmp_path)
        settings = default_settings()
        settings.language_config.languages = []
        with pytest.raises(ValidationError):
            service.save_settings(settings)
        assert not store.exists()
