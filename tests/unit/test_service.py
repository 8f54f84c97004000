from types import SimpleNamespace

import openai
import pytest

from core.config import AppConfig
from simulation.schema import response_schema
from simulation.service import OpenAIGenerationService, SimulationRequestError


class _Completions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def _config(api_key):
    return AppConfig(
        api_key=api_key,
        model="test-model",
        temperature=0.0,
        max_workers=1,
        request_timeout=5.0,
        log_level="INFO",
    )


def test_generate_sends_schema_constrained_request():
    completions = _Completions(content='{"ok": true}')
    service = OpenAIGenerationService(_client(completions), model="test-model", temperature=0.1)

    text = service.generate("simulate PETR4", response_schema())

    assert text == '{"ok": true}'
    call = completions.calls[0]
    assert call["model"] == "test-model"
    assert call["messages"][-1] == {"role": "user", "content": "simulate PETR4"}
    assert call["response_format"]["type"] == "json_schema"
    assert call["response_format"]["json_schema"]["schema"] == response_schema()


def test_generate_returns_empty_text_when_content_missing():
    service = OpenAIGenerationService(_client(_Completions(content=None)), model="m")

    assert service.generate("prompt", {}) == ""


def test_generate_wraps_service_errors():
    service = OpenAIGenerationService(_client(_Completions(error=openai.OpenAIError("boom"))), model="m")

    with pytest.raises(SimulationRequestError) as excinfo:
        service.generate("prompt", {})
    assert isinstance(excinfo.value.__cause__, openai.OpenAIError)


def test_from_config_requires_api_key():
    with pytest.raises(SimulationRequestError):
        OpenAIGenerationService.from_config(_config(None))


def test_from_config_builds_client():
    service = OpenAIGenerationService.from_config(_config("sk-test"))

    assert service.model == "test-model"
    assert service.temperature == 0.0
