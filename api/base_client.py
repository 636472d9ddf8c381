from abc import ABC, abstractmethod


class ScoringProviderError(Exception):
    """Normalized failure of a scoring (LLM) provider call."""

    VALID_CODES = {"timeout", "auth", "rate_limit", "bad_request", "provider_error", "empty_response", "unknown"}

    def __init__(self, code: str, message: str, provider: str):
        super().__init__(message)
        self.code = code if code in self.VALID_CODES else "unknown"
        self.message = message
        self.provider = provider

    def __str__(self) -> str:
        return f"{self.provider} {self.code}: {self.message}"


class BaseAIClient(ABC):
    """
    Abstract base class for relevance-scoring model clients.

    Subclasses send a system + user prompt and return the raw JSON text the
    model produced. Parsing and fallback handling belong to the RelevanceScorer.
    """

    provider_name: str = "unknown"

    @abstractmethod
    def __init__(self, api_key: str, **kwargs):
        """
        Initialize the AI client.

        Args:
            api_key: API key for the AI service
            **kwargs: Additional model-specific parameters
        """
        self.api_key = api_key
        self.model_name = kwargs.get("model_name")
        self.timeout_s = kwargs.get("timeout_s", 15.0)

    @abstractmethod
    def get_json_completion(self, system_prompt: str, prompt: str, **kwargs) -> str:
        """
        Ask the model for a JSON object.

        Args:
            system_prompt: Instructions for the model's role
            prompt: The user prompt
            **kwargs: Provider-specific overrides (model, temperature)

        Returns:
            The response text, expected to be a JSON object

        Raises:
            ScoringProviderError: On any provider failure or an empty response
        """

    def _normalize_error(self, exc: Exception) -> ScoringProviderError:
        """Map an SDK exception to a ScoringProviderError by its class name."""
        if isinstance(exc, ScoringProviderError):
            return exc

        name = type(exc).__name__.lower()
        if "timeout" in name:
            code = "timeout"
        elif "authentication" in name or "permission" in name or "unauthorized" in name:
            code = "auth"
        elif "ratelimit" in name or "resourceexhausted" in name:
            code = "rate_limit"
        elif "badrequest" in name or "invalidargument" in name:
            code = "bad_request"
        elif "connection" in name or "apierror" in name or "status" in name or "server" in name:
            code = "provider_error"
        else:
            code = "unknown"
        return ScoringProviderError(code=code, message=str(exc), provider=self.provider_name)
