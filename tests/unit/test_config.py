import pytest
from pydantic import ValidationError

from core.config import DEFAULT_MODEL, AppConfig

ENV_VARS = [
    "OPENAI_API_KEY",
    "INVESTSIM_MODEL",
    "INVESTSIM_TEMPERATURE",
    "INVESTSIM_MAX_WORKERS",
    "INVESTSIM_REQUEST_TIMEOUT",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = AppConfig.load(env_file=None)

    assert config.api_key is None
    assert config.model == DEFAULT_MODEL
    assert config.max_workers == 1
    assert config.request_timeout == 120.0
    assert config.log_level == "INFO"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("INVESTSIM_MODEL", "gpt-4o")
    monkeypatch.setenv("INVESTSIM_MAX_WORKERS", "4")
    monkeypatch.setenv("INVESTSIM_TEMPERATURE", "0.7")

    config = AppConfig.load(env_file=None)

    assert config.api_key == "sk-test"
    assert config.model == "gpt-4o"
    assert config.max_workers == 4
    assert config.temperature == 0.7


def test_reads_dotenv_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("OPENAI_API_KEY=sk-from-file\nINVESTSIM_MAX_WORKERS=3\n")

    config = AppConfig.load(env_file=str(env_file))

    assert config.api_key == "sk-from-file"
    assert config.max_workers == 3


def test_empty_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("INVESTSIM_MAX_WORKERS", "")

    assert AppConfig.load(env_file=None).max_workers == 1


@pytest.mark.parametrize("value", ["many", "0"])
def test_rejects_malformed_worker_count(monkeypatch, value):
    monkeypatch.setenv("INVESTSIM_MAX_WORKERS", value)

    with pytest.raises(ValidationError):
        AppConfig.load(env_file=None)


def test_config_is_frozen():
    config = AppConfig.load(env_file=None)

    with pytest.raises(ValidationError):
        config.model = "other"
