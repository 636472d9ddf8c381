import os
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv


class SearchProviderType(Enum):
    """Supported web search backends."""
    GOOGLE = "google"
    TAVILY = "tavily"


class ScoringProviderType(Enum):
    """Supported relevance-scoring backends."""
    OPENAI = "openai"
    GEMINI = "gemini"


DEFAULT_SCORING_MODELS = {
    ScoringProviderType.OPENAI.value: "gpt-4o-mini",
    ScoringProviderType.GEMINI.value: "gemini-2.5-flash-lite",
}


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Config:
    """Configuration management for FindOrigin.

    Values are read once from the environment (and an optional .env file) and
    then handed to the client constructors; nothing downstream reads os.environ.
    """

    def __init__(self, env_file: str | Path | None = None):
        """
        Initialize configuration with environment variables.

        Args:
            env_file: Optional path to a .env file. Defaults to the project root .env.
        """
        env_path = Path(env_file) if env_file else Path(__file__).parent.parent / ".env"
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        # Search provider
        self.SEARCH_PROVIDER = os.getenv("SEARCH_PROVIDER", SearchProviderType.GOOGLE.value).lower()
        self.GOOGLE_SEARCH_API_KEY = os.getenv("GOOGLE_SEARCH_API_KEY")
        self.GOOGLE_SEARCH_ENGINE_ID = os.getenv("GOOGLE_SEARCH_ENGINE_ID")
        self.TAVILY_API_KEY = os.getenv("TAVILY_API_KEY")

        # Scoring provider
        self.SCORING_PROVIDER = os.getenv("SCORING_PROVIDER", ScoringProviderType.OPENAI.value).lower()
        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
        self.GOOGLE_GEMINI_API_KEY = os.getenv("GOOGLE_GEMINI_API_KEY")
        self.SCORING_MODEL = os.getenv("SCORING_MODEL") or DEFAULT_SCORING_MODELS.get(
            self.SCORING_PROVIDER, "gpt-4o-mini"
        )

        # Transport
        self.TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")
        self.TELEGRAM_API_URL = os.getenv("TELEGRAM_API_URL", "https://api.telegram.org/bot")

        # Pipeline tuning
        self.SEARCH_RESULT_COUNT = max(1, _int_env("SEARCH_RESULT_COUNT", 10))
        self.TOP_N = max(1, _int_env("TOP_N", 3))
        self.PROVIDER_TIMEOUT_S = float(max(1, _int_env("PROVIDER_TIMEOUT_S", 15)))

    def missing_keys(self) -> list[str]:
        """
        Names of required settings that are not present for the selected providers.

        Returns:
            list[str]: Empty when the configuration is complete
        """
        missing: list[str] = []

        if self.SEARCH_PROVIDER == SearchProviderType.GOOGLE.value:
            if not self.GOOGLE_SEARCH_API_KEY:
                missing.append("GOOGLE_SEARCH_API_KEY")
            if not self.GOOGLE_SEARCH_ENGINE_ID:
                missing.append("GOOGLE_SEARCH_ENGINE_ID")
        elif self.SEARCH_PROVIDER == SearchProviderType.TAVILY.value:
            if not self.TAVILY_API_KEY:
                missing.append("TAVILY_API_KEY")
        else:
            missing.append("SEARCH_PROVIDER")

        if self.SCORING_PROVIDER == ScoringProviderType.OPENAI.value:
            if not self.OPENAI_API_KEY:
                missing.append("OPENAI_API_KEY")
        elif self.SCORING_PROVIDER == ScoringProviderType.GEMINI.value:
            if not self.GOOGLE_GEMINI_API_KEY:
                missing.append("GOOGLE_GEMINI_API_KEY")
        else:
            missing.append("SCORING_PROVIDER")

        return missing

    def validate(self) -> bool:
        """
        Check that all required configuration is present.

        Returns:
            bool: True if configuration is valid, False otherwise
        """
        return not self.missing_keys()

    def get_provider_info(self) -> str:
        """Short human-readable description of the selected providers."""
        return f"search={self.SEARCH_PROVIDER}, scoring={self.SCORING_PROVIDER} ({self.SCORING_MODEL})"
