import pytest

from config.messages import MessageCatalog
from tools.web.contracts import SearchProviderError

CONFIG_ENV_VARS = (
    "SEARCH_PROVIDER",
    "GOOGLE_SEARCH_API_KEY",
    "GOOGLE_SEARCH_ENGINE_ID",
    "TAVILY_API_KEY",
    "SCORING_PROVIDER",
    "OPENAI_API_KEY",
    "GOOGLE_GEMINI_API_KEY",
    "SCORING_MODEL",
    "TELEGRAM_BOT_TOKEN",
    "TELEGRAM_API_URL",
    "SEARCH_RESULT_COUNT",
    "TOP_N",
    "PROVIDER_TIMEOUT_S",
)


@pytest.fixture(scope="session")
def catalog() -> MessageCatalog:
    return MessageCatalog.from_yaml()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every FindOrigin setting from the environment.

    Each key is set before being deleted so monkeypatch restores the original
    state even for values a test loads from a .env file.
    """
    for key in CONFIG_ENV_VARS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch


@pytest.fixture
def search_error():
    def _make(category, message="boom", status_code=None):
        return SearchProviderError(category, message, status_code=status_code)

    return _make
