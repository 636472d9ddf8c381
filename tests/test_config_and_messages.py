import pytest

from config.config import Config
from config.messages import MessageCatalog
from orchestrator.factory import create_pipeline, create_scoring_client

pytestmark = pytest.mark.unit


def _config(tmp_path) -> Config:
    return Config(env_file=tmp_path / "missing.env")


def test_defaults(clean_env, tmp_path):
    config = _config(tmp_path)

    assert config.SEARCH_PROVIDER == "google"
    assert config.SCORING_PROVIDER == "openai"
    assert config.SCORING_MODEL == "gpt-4o-mini"
    assert config.SEARCH_RESULT_COUNT == 10
    assert config.TOP_N == 3
    assert config.PROVIDER_TIMEOUT_S == 15.0
    assert config.TELEGRAM_API_URL == "https://api.telegram.org/bot"


def test_missing_keys_for_google_and_openai(clean_env, tmp_path):
    config = _config(tmp_path)

    assert config.missing_keys() == ["GOOGLE_SEARCH_API_KEY", "GOOGLE_SEARCH_ENGINE_ID", "OPENAI_API_KEY"]
    assert config.validate() is False


def test_complete_tavily_gemini_config(clean_env, tmp_path):
    clean_env.setenv("SEARCH_PROVIDER", "Tavily")
    clean_env.setenv("TAVILY_API_KEY", "tvly-1")
    clean_env.setenv("SCORING_PROVIDER", "gemini")
    clean_env.setenv("GOOGLE_GEMINI_API_KEY", "g-1")
    config = _config(tmp_path)

    assert config.missing_keys() == []
    assert config.validate() is True
    assert config.SCORING_MODEL == "gemini-2.5-flash-lite"
    assert "search=tavily" in config.get_provider_info()


def test_invalid_numbers_fall_back_to_defaults(clean_env, tmp_path):
    clean_env.setenv("SEARCH_RESULT_COUNT", "many")
    clean_env.setenv("TOP_N", "0")
    clean_env.setenv("PROVIDER_TIMEOUT_S", "")
    config = _config(tmp_path)

    assert config.SEARCH_RESULT_COUNT == 10
    assert config.TOP_N == 1
    assert config.PROVIDER_TIMEOUT_S == 15.0


def test_env_file_is_loaded(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("SEARCH_RESULT_COUNT=30\nTOP_N=5\n", encoding="utf-8")
    config = Config(env_file=env_file)

    assert config.SEARCH_RESULT_COUNT == 30
    assert config.TOP_N == 5


def test_scoring_client_absent_without_key(clean_env, tmp_path):
    assert create_scoring_client(_config(tmp_path)) is None


def test_scoring_client_absent_for_unknown_provider(clean_env, tmp_path):
    clean_env.setenv("SCORING_PROVIDER", "llama")
    assert create_scoring_client(_config(tmp_path)) is None


def test_openai_scoring_client_built_from_config(clean_env, tmp_path):
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("SCORING_MODEL", "gpt-4o")
    client = create_scoring_client(_config(tmp_path))

    assert client.provider_name == "openai"
    assert client.model_name == "gpt-4o"


def test_pipeline_built_from_config(clean_env, tmp_path):
    clean_env.setenv("TOP_N", "5")
    pipeline = create_pipeline(_config(tmp_path))

    assert pipeline.top_n == 5
    assert pipeline.scorer.client is None


def test_default_catalog_has_every_message(catalog):
    assert catalog.greeting
    assert catalog.help
    assert catalog.degraded_notice
    assert set(catalog.progress) == {"processing", "searching", "analyzing"}
    assert set(catalog.search_errors) == {
        "configuration",
        "authentication",
        "authorization",
        "quota",
        "bad_request",
        "transient",
        "unknown",
    }


def test_catalog_missing_key_rejected(tmp_path):
    path = tmp_path / "messages.yaml"
    path.write_text("greeting: hi\nhelp: help\n", encoding="utf-8")

    with pytest.raises(ValueError):
        MessageCatalog.from_yaml(path)


def test_catalog_missing_file_rejected(tmp_path):
    with pytest.raises(ValueError):
        MessageCatalog.from_yaml(tmp_path / "nope.yaml")
