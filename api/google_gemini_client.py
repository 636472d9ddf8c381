import time

from google import genai

from utils.logger import get_logger

from .base_client import BaseAIClient, ScoringProviderError

logger = get_logger(__name__)


class GeminiClient(BaseAIClient):
    """
    A client for the Google Gemini API (google.genai) returning JSON output.
    """

    provider_name = "gemini"

    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash-lite", timeout_s: float = 15.0, **kwargs):
        """
        Initialize the Gemini client.

        Args:
            api_key: The Google Gemini API key
            model_name: The name of the model to use
            timeout_s: Per-request timeout in seconds
            **kwargs: Additional keyword arguments (``client`` to inject an SDK client)
        """
        super().__init__(api_key, model_name=model_name, timeout_s=timeout_s)

        if not api_key and kwargs.get("client") is None:
            raise ValueError("API key is required for Gemini")

        self.client = kwargs.get("client") or genai.Client(
            api_key=api_key,
            http_options={"timeout": int(timeout_s * 1000)},
        )
        self.model_name = model_name

    def get_json_completion(self, system_prompt: str, prompt: str, **kwargs) -> str:
        model_name = kwargs.get("model", self.model_name)
        temperature = kwargs.get("temperature", 0.3)
        start_time = time.time()

        try:
            response = self.client.models.generate_content(
                model=model_name,
                contents=prompt,
                config={
                    "system_instruction": system_prompt,
                    "temperature": temperature,
                    "response_mime_type": "application/json",
                },
            )
        except Exception as e:
            error = self._normalize_error(e)
            logger.error(
                f"Gemini completion failed: {error.code}",
                extra={"extra_fields": {"model": model_name, "error_code": error.code}},
            )
            raise error from e

        text = getattr(response, "text", None)
        if not text:
            raise ScoringProviderError("empty_response", "No response content from Gemini", self.provider_name)

        logger.info(
            "Gemini completion successful",
            extra={
                "extra_fields": {
                    "model": model_name,
                    "latency_ms": int((time.time() - start_time) * 1000),
                }
            },
        )
        return text
