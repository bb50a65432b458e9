import pytest

from devflow_core.domain.exceptions import ValidationError
from devflow_core.providers import create_provider
from devflow_core.providers.openrouter_client import OpenRouterClient
from devflow_core.providers.registry import get_provider_config


def test_create_provider_default(monkeypatch):
    class DummySettings:
        default_provider = "openrouter"
        openrouter_api_key = "sk-or-test-key"
        http_timeout = 1.0
        openrouter_base_url = "https://openrouter.ai/api/v1"

    monkeypatch.setattr("devflow_core.providers.settings", DummySettings())
    provider = create_provider()
    assert isinstance(provider, OpenRouterClient)
    assert provider.name == "openrouter"


def test_create_provider_unknown():
    with pytest.raises(ValidationError):
        create_provider("does-not-exist")


def test_provider_config_lookup_is_case_insensitive():
    cfg = get_provider_config("OpenRouter")
    assert cfg.models["devflow-chat"].max_tokens == 10000
    with pytest.raises(KeyError):
        get_provider_config("nope")


def test_create_provider_resolves_through_registry():
    provider = create_provider("OpenRouter")
    assert isinstance(provider, OpenRouterClient)
    assert get_provider_config(provider.name).base_url == "https://openrouter.ai/api/v1"
